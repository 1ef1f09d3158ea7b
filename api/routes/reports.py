"""
api/routes/reports.py
──────────────────────
Resumen mensual/anual y datos del gráfico de gasto por categoría.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_report_service
from api.schemas import ChartDataOut, SummaryOut
from services.report_service import ReportService

router = APIRouter(prefix="/users/{user_id}/reports", tags=["reports"])


@router.get("/summary", response_model=SummaryOut)
def get_summary(
    user_id: int,
    year: int = Query(...),
    month: Optional[int] = Query(None),
    service: ReportService = Depends(get_report_service),
):
    # sin mes → resumen del año completo
    if month is None:
        summary = service.yearly_summary(user_id, year)
    else:
        summary = service.monthly_summary(user_id, year, month)
    return SummaryOut.from_summary(summary)


@router.get("/category-chart", response_model=ChartDataOut)
def get_category_chart(
    user_id: int,
    year: int = Query(...),
    month: int = Query(...),
    service: ReportService = Depends(get_report_service),
):
    return ChartDataOut.from_chart(service.category_spending_chart(user_id, year, month))
