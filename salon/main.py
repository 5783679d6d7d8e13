# salon/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import Session

from .cache import LocalCache
from .config import get_scheduling_config, get_settings
from .db import create_db_and_tables, engine
from .routers import (
    agenda_routes,
    auth_routes,
    customers_routes,
    employees_routes,
    operators_routes,
    reservations_routes,
    services_routes,
)
from .store import SQLDocumentStore

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fail fast on inconsistent agenda constants
    config = get_scheduling_config()
    logger.info(
        "Agenda %s-%s, %s minute steps",
        f"{config.opening_time:%H:%M}", f"{config.closing_time:%H:%M}", config.min_step,
    )
    create_db_and_tables()
    with Session(engine) as session:
        app.state.cache.load(SQLDocumentStore(session))
    yield


app = FastAPI(title="Salon agenda", lifespan=lifespan)
app.state.cache = LocalCache()

app.include_router(auth_routes.router)
app.include_router(operators_routes.router)
app.include_router(employees_routes.router)
app.include_router(services_routes.router)
app.include_router(customers_routes.router)
app.include_router(reservations_routes.router)
app.include_router(agenda_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
