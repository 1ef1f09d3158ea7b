"""
api/routes/categories.py
─────────────────────────
CRUD de categorías de un usuario.
"""

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_category_service
from api.schemas import CategoryIn, CategoryOut
from services.category_service import CategoryService

router = APIRouter(prefix="/users/{user_id}/categories", tags=["categories"])


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def add_category(
    user_id: int,
    payload: CategoryIn,
    service: CategoryService = Depends(get_category_service),
):
    return CategoryOut.from_category(service.add(user_id, payload.name))


@router.get("", response_model=list[CategoryOut])
def list_categories(user_id: int, service: CategoryService = Depends(get_category_service)):
    return [CategoryOut.from_category(c) for c in service.list_by_user(user_id)]


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    user_id: int,
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    return CategoryOut.from_category(service.get_by_id_for_user(category_id, user_id))


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    user_id: int,
    category_id: int,
    payload: CategoryIn,
    service: CategoryService = Depends(get_category_service),
):
    return CategoryOut.from_category(service.update(user_id, category_id, payload.name))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    user_id: int,
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    service.delete(user_id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
