# salon/routers/auth_routes.py

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from salon.db import get_session
from salon.models import Operator
from salon.schemas import Token
from salon.auth import verify_password, create_access_token

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    operator = session.exec(
        select(Operator).where(Operator.email == form_data.username)
    ).first()

    if operator is None or not verify_password(form_data.password, operator.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": operator.email})
    return {"access_token": token, "token_type": "bearer"}
