"""
services/report_service.py
───────────────────────────
Resúmenes de ingresos/gastos y gasto por categoría para
un mes o un año.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from database.models import EXPENSE, INCOME, Transaction
from database.repositories import TransactionRepo, UserRepo
from services.exceptions import NotFoundError, ValidationError

# Etiqueta para gastos cuya categoría fue eliminada
UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class Summary:
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")

    @property
    def balance(self) -> Decimal:
        # siempre derivado, nunca guardado
        return self.total_income - self.total_expenses


@dataclass
class ChartData:
    labels: list[str] = field(default_factory=list)
    values: list[Decimal] = field(default_factory=list)


def _check_year(year: int) -> None:
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"Year must be between {MINYEAR} and {MAXYEAR}, got {year}.")


def month_window(year: int, month: int) -> tuple[date, date]:
    """Primer y último día del mes."""
    _check_year(year)
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}.")
    start = date(year, month, 1)
    if start.year == MAXYEAR and month == 12:
        return start, date(MAXYEAR, 12, 31)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


def year_window(year: int) -> tuple[date, date]:
    _check_year(year)
    return date(year, 1, 1), date(year, 12, 31)


def _total(txs: list[Transaction]) -> Decimal:
    return sum((t.amount for t in txs), Decimal("0"))


class ReportService:
    """Agrega transacciones del usuario por ventana de fechas."""

    def __init__(self, users: UserRepo, transactions: TransactionRepo):
        self.users = users
        self.transactions = transactions

    def _require_user(self, user_id: int) -> None:
        if not self.users.exists(user_id):
            raise NotFoundError("User", "id", user_id)

    # ── Resúmenes ─────────────────────────────────────────

    def monthly_summary(self, user_id: int, year: int, month: int) -> Summary:
        self._require_user(user_id)
        start, end = month_window(year, month)
        return self._summary(user_id, start, end)

    def yearly_summary(self, user_id: int, year: int) -> Summary:
        self._require_user(user_id)
        start, end = year_window(year)
        return self._summary(user_id, start, end)

    def _summary(self, user_id: int, start: date, end: date) -> Summary:
        income = self.transactions.list_by_type_between(user_id, INCOME, start, end)
        expenses = self.transactions.list_by_type_between(user_id, EXPENSE, start, end)
        return Summary(total_income=_total(income), total_expenses=_total(expenses))

    # ── Gráfico por categoría ─────────────────────────────

    def category_spending_chart(self, user_id: int, year: int, month: int) -> ChartData:
        """
        Gasto del mes agrupado por nombre de categoría.
        Las etiquetas salen en el orden en que aparece cada categoría;
        categorías sin gastos en el mes no aparecen.
        """
        self._require_user(user_id)
        start, end = month_window(year, month)
        expenses = self.transactions.list_by_type_between(user_id, EXPENSE, start, end)

        by_category: dict[str, Decimal] = {}
        for tx in expenses:
            label = tx.category_name or UNCATEGORIZED
            by_category[label] = by_category.get(label, Decimal("0")) + tx.amount

        return ChartData(labels=list(by_category), values=list(by_category.values()))
