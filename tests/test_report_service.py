"""
tests/test_report_service.py
─────────────────────────────
Tests unitarios para services/report_service.py
"""

from datetime import date
from decimal import Decimal

import pytest

from database.models import Transaction
from services.exceptions import NotFoundError, ValidationError
from services.report_service import (
    UNCATEGORIZED,
    ReportService,
    Summary,
    month_window,
    year_window,
)

USER_ID = 1


def _tx(tx_type: str, amount: str, day: date, category: str | None = "Food") -> Transaction:
    return Transaction(
        user_id=USER_ID,
        category_id=3 if category else None,
        type=tx_type,
        amount=Decimal(amount),
        date=day,
        category_name=category,
    )


def _by_type(rows: list[Transaction]):
    """side_effect que imita el filtro por tipo del repositorio."""
    def fake(user_id, tx_type, start, end):
        return [t for t in rows if t.type == tx_type and start <= t.date <= end]
    return fake


@pytest.fixture
def service(user_repo, transaction_repo):
    return ReportService(user_repo, transaction_repo)


class TestWindows:
    def test_month_window_regular(self):
        assert month_window(2024, 1) == (date(2024, 1, 1), date(2024, 1, 31))

    def test_month_window_leap_february(self):
        assert month_window(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_month_window_december(self):
        assert month_window(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_year_window(self):
        assert year_window(2024) == (date(2024, 1, 1), date(2024, 12, 31))

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, month):
        with pytest.raises(ValidationError):
            month_window(2024, month)

    def test_invalid_year(self):
        with pytest.raises(ValidationError):
            year_window(0)


class TestSummary:
    def test_monthly_summary_example(self, service, transaction_repo):
        transaction_repo.list_by_type_between.side_effect = _by_type([
            _tx("EXPENSE", "50.00", date(2024, 1, 5), "Food"),
            _tx("INCOME", "2000.00", date(2024, 1, 20), "Salary"),
        ])

        summary = service.monthly_summary(USER_ID, 2024, 1)

        assert summary.total_income == Decimal("2000.00")
        assert summary.total_expenses == Decimal("50.00")
        assert summary.balance == Decimal("1950.00")

    def test_monthly_summary_queries_inclusive_window(self, service, transaction_repo):
        transaction_repo.list_by_type_between.return_value = []
        service.monthly_summary(USER_ID, 2024, 2)

        transaction_repo.list_by_type_between.assert_any_call(
            USER_ID, "INCOME", date(2024, 2, 1), date(2024, 2, 29)
        )
        transaction_repo.list_by_type_between.assert_any_call(
            USER_ID, "EXPENSE", date(2024, 2, 1), date(2024, 2, 29)
        )

    def test_yearly_summary_without_transactions_is_zero(self, service, transaction_repo):
        transaction_repo.list_by_type_between.return_value = []

        summary = service.yearly_summary(USER_ID, 2023)

        assert summary.total_income == 0
        assert summary.total_expenses == 0
        assert summary.balance == 0

    def test_yearly_summary_spans_whole_year(self, service, transaction_repo):
        transaction_repo.list_by_type_between.side_effect = _by_type([
            _tx("INCOME", "100.10", date(2024, 1, 1)),
            _tx("INCOME", "0.20", date(2024, 12, 31)),
            _tx("EXPENSE", "0.30", date(2024, 6, 15)),
            _tx("INCOME", "999.00", date(2025, 1, 1)),
        ])

        summary = service.yearly_summary(USER_ID, 2024)

        assert summary.total_income == Decimal("100.30")
        assert summary.total_expenses == Decimal("0.30")
        assert summary.balance == Decimal("100.00")

    def test_unknown_user(self, service, user_repo):
        user_repo.exists.return_value = False
        with pytest.raises(NotFoundError):
            service.monthly_summary(99, 2024, 1)
        with pytest.raises(NotFoundError):
            service.yearly_summary(99, 2024)


@pytest.mark.parametrize(
    "income, expenses",
    [
        ("0", "0"),
        ("0.10", "0.20"),
        ("2000.00", "50.00"),
        ("1E+3", "999.9999"),
        ("12345678901234.5678", "0.0001"),
        ("0.3", "0.1"),
    ],
)
def test_balance_is_exact_difference(income, expenses):
    summary = Summary(total_income=Decimal(income), total_expenses=Decimal(expenses))
    assert summary.balance == Decimal(income) - Decimal(expenses)
    assert summary.balance + summary.total_expenses == summary.total_income


class TestCategoryChart:
    def test_groups_same_category(self, service, transaction_repo):
        transaction_repo.list_by_type_between.side_effect = _by_type([
            _tx("EXPENSE", "30.00", date(2024, 1, 3), "Food"),
            _tx("EXPENSE", "20.00", date(2024, 1, 18), "Food"),
        ])

        chart = service.category_spending_chart(USER_ID, 2024, 1)

        assert chart.labels == ["Food"]
        assert chart.values == [Decimal("50.00")]

    def test_keeps_first_seen_order_and_skips_empty_categories(self, service, transaction_repo):
        # "Rent" existe pero no tiene gastos en el mes: no aparece
        transaction_repo.list_by_type_between.side_effect = _by_type([
            _tx("EXPENSE", "15.00", date(2024, 1, 2), "Transport"),
            _tx("EXPENSE", "30.00", date(2024, 1, 3), "Food"),
            _tx("EXPENSE", "5.00", date(2024, 1, 9), "Transport"),
            _tx("INCOME", "2000.00", date(2024, 1, 20), "Salary"),
            _tx("EXPENSE", "700.00", date(2024, 2, 1), "Rent"),
        ])

        chart = service.category_spending_chart(USER_ID, 2024, 1)

        assert chart.labels == ["Transport", "Food"]
        assert chart.values == [Decimal("20.00"), Decimal("30.00")]
        assert "Salary" not in chart.labels
        assert "Rent" not in chart.labels

    def test_expenses_of_deleted_category(self, service, transaction_repo):
        transaction_repo.list_by_type_between.side_effect = _by_type([
            _tx("EXPENSE", "12.00", date(2024, 1, 3), None),
        ])

        chart = service.category_spending_chart(USER_ID, 2024, 1)
        assert chart.labels == [UNCATEGORIZED]

    def test_empty_month(self, service, transaction_repo):
        transaction_repo.list_by_type_between.return_value = []
        chart = service.category_spending_chart(USER_ID, 2024, 1)
        assert chart.labels == []
        assert chart.values == []

    def test_unknown_user(self, service, user_repo):
        user_repo.exists.return_value = False
        with pytest.raises(NotFoundError):
            service.category_spending_chart(99, 2024, 1)
