"""
api/routes/users.py
────────────────────
Perfil de usuario.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_user_service
from api.schemas import UserOut, UserUpdate
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserOut)
def get_profile(user_id: int, service: UserService = Depends(get_user_service)):
    return UserOut.from_profile(service.get_by_id(user_id))


@router.put("/{user_id}", response_model=UserOut)
def update_profile(
    user_id: int,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    profile = service.update_profile(user_id, payload.name, payload.preferred_currency)
    return UserOut.from_profile(profile)
