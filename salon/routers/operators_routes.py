# salon/routers/operators_routes.py

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from salon.db import get_session
from salon.models import Operator
from salon.schemas import OperatorCreate, OperatorPublic
from salon.auth import get_current_operator, hash_password

router = APIRouter(
    tags=["operators"],
)


@router.get("/me", response_model=OperatorPublic)
def me(current_operator: Operator = Depends(get_current_operator)):
    return {"id": current_operator.id, "email": current_operator.email}


@router.post("/operators", status_code=201, response_model=OperatorPublic)
def create_operator(
    operator: OperatorCreate,
    session: Session = Depends(get_session),
):
    # 1) Check if email already exists
    existing = session.exec(
        select(Operator).where(Operator.email == operator.email)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    # 2) Create operator in DB
    db_operator = Operator(
        email=operator.email,
        password_hash=hash_password(operator.password),
    )

    session.add(db_operator)
    session.commit()
    session.refresh(db_operator)  # fills db_operator.id

    return {"id": db_operator.id, "email": db_operator.email}
