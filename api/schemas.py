"""
api/schemas.py
───────────────
Modelos Pydantic de entrada/salida de la API.
Los campos viajan en camelCase (preferredCurrency, categoryId, ...)
y los montos se serializan como string decimal, nunca como float.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from database.models import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS, Category, Transaction, UserProfile
from services.report_service import ChartData, Summary
from services.transaction_service import TransactionInput


def format_amount(value: Decimal) -> str:
    """Como mínimo dos decimales; más solo si el valor los tiene."""
    cents = value.quantize(Decimal("0.01"))
    if cents == value:
        return str(cents)
    return str(value.normalize())


Money = Annotated[Decimal, PlainSerializer(format_amount, return_type=str, when_used="json")]


class Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─────────────────────────────────────────────
#  Users / auth
# ─────────────────────────────────────────────

class RegistrationRequest(Schema):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    preferred_currency: Optional[str] = Field(None, max_length=3)


class LoginRequest(Schema):
    email: str
    password: str


class UserUpdate(Schema):
    name: str = Field(..., min_length=1, max_length=100)
    preferred_currency: Optional[str] = Field(None, max_length=3)


class UserOut(Schema):
    id: int
    name: str
    email: str
    preferred_currency: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserOut":
        return cls(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            preferred_currency=profile.preferred_currency,
        )


# ─────────────────────────────────────────────
#  Categories
# ─────────────────────────────────────────────

class CategoryIn(Schema):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryOut(Schema):
    id: int
    name: str

    @classmethod
    def from_category(cls, category: Category) -> "CategoryOut":
        return cls(id=category.id, name=category.name)


# ─────────────────────────────────────────────
#  Transactions
# ─────────────────────────────────────────────

class TransactionIn(Schema):
    type: Literal["INCOME", "EXPENSE"]
    amount: Decimal = Field(
        ..., ge=0, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )
    description: Optional[str] = Field(None, max_length=255)
    date: date
    category_id: int

    def to_input(self) -> TransactionInput:
        return TransactionInput(
            type=self.type,
            amount=self.amount,
            description=self.description,
            date=self.date,
            category_id=self.category_id,
        )


class TransactionOut(Schema):
    id: int
    type: str
    amount: Money
    description: Optional[str] = None
    date: date
    category_id: Optional[int] = None
    category_name: Optional[str] = None

    @classmethod
    def from_transaction(cls, tx: Transaction) -> "TransactionOut":
        return cls(
            id=tx.id,
            type=tx.type,
            amount=tx.amount,
            description=tx.description,
            date=tx.date,
            category_id=tx.category_id,
            category_name=tx.category_name,
        )


# ─────────────────────────────────────────────
#  Reports
# ─────────────────────────────────────────────

class SummaryOut(Schema):
    total_income: Money
    total_expenses: Money
    balance: Money

    @classmethod
    def from_summary(cls, summary: Summary) -> "SummaryOut":
        return cls(
            total_income=summary.total_income,
            total_expenses=summary.total_expenses,
            balance=summary.balance,
        )


class ChartDataOut(Schema):
    labels: list[str]
    values: list[Money]

    @classmethod
    def from_chart(cls, chart: ChartData) -> "ChartDataOut":
        return cls(labels=chart.labels, values=chart.values)
