"""Dashboard statistics DTOs: pure Pydantic, zero HTTP imports."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field

from bluemoon.api.schemas.common import BackendModel, FeeRef, HouseholdRef


class Counts(BackendModel):
    households: int = 0
    residents: int = 0
    fees: int = 0
    temporary_residences: int = 0
    temporary_absences: int = 0


class MonthlyTrend(BackendModel):
    labels: list[str] = Field(default_factory=list)
    data: list[float] = Field(default_factory=list)


class Financials(BackendModel):
    monthly_revenue: float = 0
    revenue_by_type: dict[str, float | None] = Field(default_factory=dict)
    monthly_trend: MonthlyTrend | None = None
    display_month_name: str | None = None


class RecentPayment(BackendModel):
    id: str = Field(alias="_id")
    household: HouseholdRef | None = None
    fee: FeeRef | None = None
    amount: float = 0
    payment_date: datetime | None = None


class DashboardStats(BackendModel):
    counts: Counts = Field(default_factory=Counts)
    financials: Financials = Field(default_factory=Financials)
    recent_payments: list[RecentPayment] = Field(default_factory=list)
