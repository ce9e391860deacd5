# backend/routers/auth_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.session import get_db
from schemas.users import RegisterPayload, LoginPayload, AuthResponse
from services import identity_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register_user(body: RegisterPayload, db: Session = Depends(get_db)):
    return identity_service.register(db, body.name, body.email, body.password, body.role)


@router.post("/login", response_model=AuthResponse)
def login(body: LoginPayload, db: Session = Depends(get_db)):
    return identity_service.authenticate(db, body.email, body.password, body.role)
