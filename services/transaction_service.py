"""
services/transaction_service.py
────────────────────────────────
Lógica de negocio para gestión de transacciones.
Toda transacción pertenece a un usuario y a una categoría de ese
mismo usuario.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from database.models import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    TRANSACTION_TYPES,
    Category,
    Transaction,
    TransactionType,
)
from database.repositories import CategoryRepo, TransactionRepo, UserRepo
from services.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES)
_AMOUNT_STEP = Decimal(1).scaleb(-AMOUNT_DECIMAL_PLACES)


@dataclass
class TransactionInput:
    """Datos editables de una transacción, tal como llegan del cliente."""

    type: TransactionType
    amount: Decimal
    date: date
    category_id: int
    description: Optional[str] = None

    def validate(self) -> None:
        if self.type not in TRANSACTION_TYPES:
            raise ValidationError(f"Unknown transaction type: '{self.type}'")
        if not self.amount.is_finite():
            raise ValidationError("Amount must be a finite number.")
        if self.amount < 0:
            raise ValidationError("Amount must not be negative; use type EXPENSE instead.")
        if self.amount >= _AMOUNT_LIMIT:
            raise ValidationError(
                f"Amount must have at most {AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES} integer digits."
            )
        if self.amount != self.amount.quantize(_AMOUNT_STEP):
            raise ValidationError(f"Amount must have at most {AMOUNT_DECIMAL_PLACES} decimal places.")


class TransactionService:
    """Gestiona el ciclo de vida de las transacciones financieras."""

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

    def _require_category(self, category_id: int, user_id: int) -> Category:
        """La categoría tiene que existir y ser del usuario."""
        category = self.categories.get_for_user(category_id, user_id)
        if category is None:
            raise NotFoundError("Category", "id", f"{category_id} for user {user_id}")
        return category

    # ── Creación ──────────────────────────────────────────

    def add(self, user_id: int, data: TransactionInput) -> Transaction:
        """
        Raises:
            NotFoundError: si el usuario no existe o la categoría no es suya.
            ValidationError: si el tipo o el monto son inválidos.
        """
        data.validate()
        self._require_user(user_id)
        category = self._require_category(data.category_id, user_id)

        tx = Transaction(
            user_id=user_id,
            category_id=category.id,
            type=data.type,
            amount=data.amount,
            description=data.description,
            date=data.date,
        )
        saved = self.transactions.create(tx)
        # el insert no trae el embed de la categoría
        saved.category_name = category.name

        logger.info("Transacción creada id=%s user=%s type=%s", saved.id, user_id, saved.type)
        return saved

    # ── Consultas ─────────────────────────────────────────

    def list_by_user(self, user_id: int) -> list[Transaction]:
        """Transacciones del usuario, más recientes primero."""
        self._require_user(user_id)
        return self.transactions.list_by_user(user_id)

    def list_by_user_between(self, user_id: int, start: date, end: date) -> list[Transaction]:
        """Transacciones del usuario entre dos fechas (inclusive)."""
        if start > end:
            raise ValidationError("start must not be after end.")
        self._require_user(user_id)
        return self.transactions.list_by_user_between(user_id, start, end)

    def get_by_id_for_user(self, transaction_id: int, user_id: int) -> Transaction:
        tx = self.transactions.get_for_user(transaction_id, user_id)
        if tx is None:
            raise NotFoundError("Transaction", "id", transaction_id)
        return tx

    # ── Edición ───────────────────────────────────────────

    def update(self, user_id: int, transaction_id: int, data: TransactionInput) -> Transaction:
        """
        Sobrescribe tipo, monto, descripción y fecha. Si cambia la
        categoría, se vuelve a verificar que sea del usuario.
        """
        data.validate()
        existing = self.get_by_id_for_user(transaction_id, user_id)

        category_name = existing.category_name
        if data.category_id != existing.category_id:
            category_name = self._require_category(data.category_id, user_id).name

        existing.category_id = data.category_id
        existing.type = data.type
        existing.amount = data.amount
        existing.description = data.description
        existing.date = data.date

        updated = self.transactions.update(transaction_id, user_id, existing)
        if updated is None:
            raise NotFoundError("Transaction", "id", transaction_id)
        updated.category_name = category_name

        logger.info("Transacción actualizada id=%s user=%s", transaction_id, user_id)
        return updated

    # ── Eliminación ───────────────────────────────────────

    def delete(self, user_id: int, transaction_id: int) -> None:
        self.get_by_id_for_user(transaction_id, user_id)
        if not self.transactions.delete(transaction_id, user_id):
            raise NotFoundError("Transaction", "id", transaction_id)
        logger.info("Transacción eliminada id=%s user=%s", transaction_id, user_id)
