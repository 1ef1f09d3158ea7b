"""
services/category_service.py
─────────────────────────────
CRUD de categorías, siempre dentro del alcance de un usuario.
"""

from __future__ import annotations

import logging

from database.models import Category
from database.repositories import CategoryRepo, TransactionRepo, UniqueViolation, UserRepo
from services.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Category name must not be blank.")
    return cleaned


class CategoryService:
    """Gestiona las categorías definidas por cada usuario."""

    def __init__(
        self,
        users: UserRepo,
        categories: CategoryRepo,
        transactions: TransactionRepo,
    ):
        self.users = users
        self.categories = categories
        self.transactions = transactions

    def _require_user(self, user_id: int) -> None:
        if not self.users.exists(user_id):
            raise NotFoundError("User", "id", user_id)

    # ── Creación ──────────────────────────────────────────

    def add(self, user_id: int, name: str) -> Category:
        """
        Raises:
            NotFoundError: si el usuario no existe.
            ConflictError: si el usuario ya tiene una categoría con ese nombre.
        """
        self._require_user(user_id)
        name = _clean_name(name)
        if self.categories.exists_by_name(user_id, name):
            raise ConflictError(
                f"Category with name '{name}' already exists for this user."
            )
        try:
            saved = self.categories.create(Category(user_id=user_id, name=name))
        except UniqueViolation as exc:
            raise ConflictError(
                f"Category with name '{name}' already exists for this user."
            ) from exc

        logger.info("Categoría creada id=%s user=%s", saved.id, user_id)
        return saved

    # ── Consultas ─────────────────────────────────────────

    def list_by_user(self, user_id: int) -> list[Category]:
        """Categorías del usuario ordenadas por nombre."""
        self._require_user(user_id)
        return self.categories.list_by_user(user_id)

    def get_by_id_for_user(self, category_id: int, user_id: int) -> Category:
        category = self.categories.get_for_user(category_id, user_id)
        if category is None:
            raise NotFoundError("Category", "id", category_id)
        return category

    # ── Edición ───────────────────────────────────────────

    def update(self, user_id: int, category_id: int, new_name: str) -> Category:
        """
        Renombra la categoría. El nombre nuevo no puede coincidir,
        ignorando mayúsculas, con otra categoría del mismo usuario.
        """
        self._require_user(user_id)
        self.get_by_id_for_user(category_id, user_id)
        new_name = _clean_name(new_name)

        clashes = [
            c for c in self.categories.find_by_name_ignore_case(user_id, new_name)
            if c.id != category_id
        ]
        if clashes:
            raise ConflictError(
                f"Another category with name '{new_name}' already exists for this user."
            )

        try:
            updated = self.categories.rename(category_id, user_id, new_name)
        except UniqueViolation as exc:
            raise ConflictError(
                f"Another category with name '{new_name}' already exists for this user."
            ) from exc
        if updated is None:
            raise NotFoundError("Category", "id", category_id)

        logger.info("Categoría renombrada id=%s user=%s", category_id, user_id)
        return updated

    # ── Eliminación ───────────────────────────────────────

    def delete(self, user_id: int, category_id: int) -> None:
        """
        Elimina la categoría aunque tenga transacciones asociadas.
        Esas transacciones quedan con category_id NULL (ver schema.sql).
        """
        self.get_by_id_for_user(category_id, user_id)

        referencing = self.transactions.count_by_category(category_id, user_id)
        if referencing:
            logger.warning(
                "Categoría id=%s user=%s eliminada con %d transacciones asociadas; "
                "quedan sin categoría",
                category_id, user_id, referencing,
            )

        if not self.categories.delete(category_id, user_id):
            raise NotFoundError("Category", "id", category_id)
        logger.info("Categoría eliminada id=%s user=%s", category_id, user_id)
