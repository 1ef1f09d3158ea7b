"""
api/routes/auth.py
───────────────────
Registro y login.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_service
from api.schemas import LoginRequest, RegistrationRequest, UserOut
from services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegistrationRequest, service: UserService = Depends(get_user_service)):
    profile = service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        currency=payload.preferred_currency,
    )
    return UserOut.from_profile(profile)


@router.post("/login", response_model=UserOut)
def login(payload: LoginRequest, service: UserService = Depends(get_user_service)):
    profile = service.login(payload.email, payload.password)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return UserOut.from_profile(profile)
