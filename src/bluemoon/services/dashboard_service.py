"""Dashboard use-case service.

Turns the raw ``/statistics/dashboard`` payload into chart-ready series and
display strings. Nothing here touches Streamlit or plotly; ``bluemoon.ui.charts``
draws what these functions return.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bluemoon.config import settings
from bluemoon.domain.exceptions import APIError
from bluemoon.domain.formatting import format_date, format_number, format_vnd
from bluemoon.logging import logger
from bluemoon.api.schemas.statistics import Counts, DashboardStats, Financials

if TYPE_CHECKING:
    from bluemoon.ui.api_client import BlueMoonClient

LOAD_ERROR = "Không thể tải dữ liệu tổng quan"
CURRENT_MONTH = "Tháng hiện tại"

REVENUE_DATASET_LABEL = "Doanh Thu Tháng Hiện Tại"
TREND_DATASET_LABEL = "Doanh Thu Hàng Tháng"
COUNTS_DATASET_LABEL = "Số Lượng"

PALETTE_BACKGROUND = (
    "rgba(255, 99, 132, 0.6)",
    "rgba(54, 162, 235, 0.6)",
    "rgba(255, 206, 86, 0.6)",
    "rgba(75, 192, 192, 0.6)",
    "rgba(153, 102, 255, 0.6)",
    "rgba(255, 159, 64, 0.6)",
    "rgba(199, 199, 199, 0.6)",
)
PALETTE_BORDER = (
    "rgba(255, 99, 132, 1)",
    "rgba(54, 162, 235, 1)",
    "rgba(255, 206, 86, 1)",
    "rgba(75, 192, 192, 1)",
    "rgba(153, 102, 255, 1)",
    "rgba(255, 159, 64, 1)",
    "rgba(199, 199, 199, 1)",
)

TREND_LINE_COLOR = "rgb(75, 192, 192)"
TREND_FILL_COLOR = "rgba(75, 192, 192, 0.5)"

FALLBACK_MONTHS = ("Th1", "Th2", "Th3", "Th4", "Th5", "Th6")
FALLBACK_BASE_REVENUE = 10_000_000

# (label, Counts attribute, background, border)
_COUNT_CATEGORIES = (
    ("Hộ Gia Đình", "households", "rgba(54, 162, 235, 0.6)", "rgba(54, 162, 235, 1)"),
    ("Cư Dân", "residents", "rgba(75, 192, 192, 0.6)", "rgba(75, 192, 192, 1)"),
    ("Tạm Trú", "temporary_residences", "rgba(255, 206, 86, 0.6)", "rgba(255, 206, 86, 1)"),
    ("Tạm Vắng", "temporary_absences", "rgba(255, 99, 132, 0.6)", "rgba(255, 99, 132, 1)"),
)


@dataclass
class ChartSeries:
    labels: list[str]
    values: list[float]
    dataset_label: str
    background_colors: list[str] = field(default_factory=list)
    border_colors: list[str] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class DashboardCharts:
    revenue_by_type: ChartSeries
    monthly_trend: ChartSeries
    counts: ChartSeries
    month_name: str


# ----------------------------------------------------------------------
# Series builders
# ----------------------------------------------------------------------

def revenue_by_type_series(revenue_by_type: dict[str, float | None]) -> ChartSeries:
    """Positive entries only (nulls dropped), largest first, colored by position."""
    entries = sorted(
        ((label, value) for label, value in revenue_by_type.items() if value is not None and value > 0),
        key=lambda entry: entry[1],
        reverse=True,
    )
    n = len(entries)
    return ChartSeries(
        labels=[f"{label}: {format_vnd(value)}" for label, value in entries],
        values=[value for _, value in entries],
        dataset_label=REVENUE_DATASET_LABEL,
        background_colors=list(PALETTE_BACKGROUND[:n]),
        border_colors=list(PALETTE_BORDER[:n]),
    )


def synthetic_trend(monthly_revenue: float) -> list[int]:
    """Six made-up points derived from this month's revenue.

    The backend may omit ``monthlyTrend``; the chart then shows these values
    instead of real history.
    """
    base = monthly_revenue or FALLBACK_BASE_REVENUE
    return [math.floor(base * (0.8 + (i % 3) * 0.15)) for i in range(len(FALLBACK_MONTHS))]


def monthly_trend_series(financials: Financials, synthesize: bool | None = None) -> ChartSeries:
    if synthesize is None:
        synthesize = settings.SYNTHETIC_TREND_FALLBACK
    trend = financials.monthly_trend
    if trend is not None:
        labels, values = list(trend.labels), list(trend.data)
    elif synthesize:
        labels, values = list(FALLBACK_MONTHS), synthetic_trend(financials.monthly_revenue)
    else:
        labels, values = [], []
    return ChartSeries(
        labels=labels,
        values=values,
        dataset_label=TREND_DATASET_LABEL,
        background_colors=[TREND_FILL_COLOR],
        border_colors=[TREND_LINE_COLOR],
    )


def counts_series(counts: Counts, include_temporary: bool = False) -> ChartSeries:
    categories = _COUNT_CATEGORIES if include_temporary else _COUNT_CATEGORIES[:2]
    return ChartSeries(
        labels=[label for label, _, _, _ in categories],
        values=[getattr(counts, attr) for _, attr, _, _ in categories],
        dataset_label=COUNTS_DATASET_LABEL,
        background_colors=[bg for _, _, bg, _ in categories],
        border_colors=[border for _, _, _, border in categories],
    )


# ----------------------------------------------------------------------
# Tooltips & display strings
# ----------------------------------------------------------------------

def percentage(value: float, total: float) -> int:
    """Share of *total* in whole percent, halves rounded up."""
    if not total:
        return 0
    return math.floor(value / total * 100 + 0.5)


def pie_tooltip(value: float, values: list[float]) -> str:
    return f"{format_vnd(value)} ({percentage(value, sum(values))}%)"


def pie_tooltip_title(label: str) -> str:
    """The fee type part of a ``"<type>: <amount> VND"`` slice label."""
    return label.split(":")[0]


def value_tooltip(dataset_label: str, value: float) -> str:
    return f"{dataset_label}: {format_vnd(value)}"


def month_name(financials: Financials) -> str:
    return financials.display_month_name or CURRENT_MONTH


def revenue_card_value(financials: Financials) -> str:
    return format_number(financials.monthly_revenue)


def recent_payment_rows(stats: DashboardStats) -> list[dict[str, str]]:
    return [
        {
            "Hộ Gia Đình": (p.household.apartment_number if p.household else "") or "N/A",
            "Phí": (p.fee.name if p.fee else "") or "N/A",
            "Số Tiền": format_vnd(p.amount),
            "Ngày": format_date(p.payment_date),
        }
        for p in stats.recent_payments
    ]


# ----------------------------------------------------------------------
# Screen state
# ----------------------------------------------------------------------

class DashboardScreen:
    """Fetch-once state for the dashboard page."""

    def __init__(self, client: "BlueMoonClient") -> None:
        self._client = client
        self.stats = DashboardStats()
        self.loading = True
        self.error: str | None = None

    def load(self) -> DashboardStats:
        try:
            if not self._client.token:
                return self.stats
            self.stats = self._client.get_dashboard_stats()
        except APIError as exc:
            self.error = LOAD_ERROR
            logger.error("Error fetching dashboard data: %s", exc)
        finally:
            self.loading = False
        return self.stats

    @property
    def charts(self) -> DashboardCharts | None:
        if self.loading or self.error:
            return None
        financials = self.stats.financials
        return DashboardCharts(
            revenue_by_type=revenue_by_type_series(financials.revenue_by_type),
            monthly_trend=monthly_trend_series(financials),
            counts=counts_series(self.stats.counts),
            month_name=month_name(financials),
        )
