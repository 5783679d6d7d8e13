# salon/routers/agenda_routes.py

from datetime import datetime

from fastapi import APIRouter, Depends

from salon.auth import get_current_operator
from salon.deps import get_grid
from salon.formatting import format_human_datetime, format_minutes, hour_minute_to_string
from salon.schemas import GridResponse
from salon.timegrid import TimeGrid

router = APIRouter(
    prefix="/agenda",
    tags=["agenda"],
    dependencies=[Depends(get_current_operator)],
)


@router.get("/grid", response_model=GridResponse)
def agenda_grid(grid: TimeGrid = Depends(get_grid)):
    return {
        "min_step": grid.min_step,
        "minute_offsets": list(grid.minute_offsets_within_hour),
        "service_durations": list(grid.service_duration_options),
        "service_duration_labels": [format_minutes(m) for m in grid.service_duration_options],
        "business_day_slots": list(grid.business_day_slots),
        "slot_labels": [hour_minute_to_string(s) for s in grid.business_day_slots],
    }


@router.get("/next-slot")
def next_valid_slot(grid: TimeGrid = Depends(get_grid)):
    # default start of a new reservation form
    start = grid.closest_valid_instant(datetime.now())
    return {"start": start, "label": format_human_datetime(start)}
