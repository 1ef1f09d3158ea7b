"""
database/models.py
──────────────────
Modelos de datos (dataclasses) que representan las tablas de Supabase.
Sirven como contratos entre capas, sin ORM pesado.

Tablas esperadas (ver database/schema.sql):
  - users         (id, name, email, password_hash, preferred_currency,
                   created_at)
  - categories    (id, user_id, name, created_at)
  - transactions  (id, user_id, category_id, type, amount, description,
                   date, created_at)

Los montos viajan siempre como Decimal; nunca como float.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal, Optional


def to_decimal(value: Any) -> Decimal:
    """Convierte lo que devuelva PostgREST (str, int o float) a Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _parse_date(raw: Any) -> date:
    return date.fromisoformat(raw) if isinstance(raw, str) else raw


# ─────────────────────────────────────────────
#  Users
# ─────────────────────────────────────────────

@dataclass
class User:
    name: str
    email: str
    password_hash: str
    preferred_currency: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=data.get("id"),
            name=data["name"],
            email=data["email"],
            password_hash=data.get("password_hash", ""),
            preferred_currency=data.get("preferred_currency") or "",
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "preferred_currency": self.preferred_currency,
        }

    def profile(self) -> "UserProfile":
        return UserProfile(
            id=self.id,
            name=self.name,
            email=self.email,
            preferred_currency=self.preferred_currency,
        )


@dataclass
class UserProfile:
    """Vista pública del usuario: nunca incluye el hash de la contraseña."""

    id: Optional[int]
    name: str
    email: str
    preferred_currency: str


# ─────────────────────────────────────────────
#  Categories
# ─────────────────────────────────────────────

@dataclass
class Category:
    user_id: int
    name: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            name=data["name"],
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
        }


# ─────────────────────────────────────────────
#  Transactions
# ─────────────────────────────────────────────

TransactionType = Literal["INCOME", "EXPENSE"]

INCOME: TransactionType = "INCOME"
EXPENSE: TransactionType = "EXPENSE"
TRANSACTION_TYPES: tuple[str, ...] = (INCOME, EXPENSE)

# numeric(15, 4): PostgREST manda los montos como número JSON (float),
# con más de 15 dígitos significativos se perdería precisión al leer
AMOUNT_MAX_DIGITS = 15
AMOUNT_DECIMAL_PLACES = 4


@dataclass
class Transaction:
    user_id: int
    category_id: Optional[int]           # None si la categoría fue borrada
    type: TransactionType                # "INCOME" | "EXPENSE"
    amount: Decimal                      # siempre >= 0, el signo lo da `type`
    date: date
    description: Optional[str] = None
    id: Optional[int] = None
    category_name: Optional[str] = None  # solo lectura, viene del join
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        # PostgREST devuelve el embed `categories(name)` como dict (o None)
        embedded = data.get("categories") or {}
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            category_id=data.get("category_id"),
            type=data["type"],
            amount=to_decimal(data["amount"]),
            description=data.get("description"),
            date=_parse_date(data["date"]),
            category_name=embedded.get("name", data.get("category_name")),
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "category_id": self.category_id,
            "type": self.type,
            # como string para no perder precisión en el JSON
            "amount": str(self.amount),
            "description": self.description,
            "date": self.date.isoformat(),
        }
