import httpx

from bluemoon.api.schemas.statistics import Counts, Financials, MonthlyTrend
from bluemoon.services.dashboard_service import (
    FALLBACK_MONTHS,
    LOAD_ERROR,
    DashboardScreen,
    counts_series,
    monthly_trend_series,
    percentage,
    pie_tooltip,
    pie_tooltip_title,
    recent_payment_rows,
    revenue_by_type_series,
    synthetic_trend,
)

STATS = {
    "counts": {"households": 5, "residents": 12, "fees": 3},
    "financials": {
        "monthlyRevenue": 3000000,
        "revenueByType": {"service": 1000000, "parking": 2000000, "water": 0},
        "displayMonthName": "Tháng 5/2024",
    },
    "recentPayments": [
        {"_id": "p1", "household": {"_id": "h1", "apartmentNumber": "A101"},
         "fee": {"_id": "f1", "name": "Phí dịch vụ"}, "amount": 500000,
         "paymentDate": "2024-05-03T00:00:00.000Z"},
        {"_id": "p2", "amount": 1000},
    ],
}


def test_revenue_series_drops_non_positive_and_sorts_descending():
    series = revenue_by_type_series({"service": 1000000, "parking": 2000000, "water": 0, "gas": -500})
    assert series.values == [2000000, 1000000]
    assert series.labels == ["parking: 2.000.000 VND", "service: 1.000.000 VND"]
    assert len(series.background_colors) == 2


def test_revenue_series_empty():
    assert len(revenue_by_type_series({})) == 0


def test_synthetic_trend_six_points():
    series = monthly_trend_series(Financials(monthly_revenue=0), synthesize=True)
    assert series.labels == list(FALLBACK_MONTHS)
    assert series.values == [8000000, 9500000, 11000000, 8000000, 9500000, 11000000]


def test_synthetic_trend_from_revenue():
    assert synthetic_trend(1000) == [800, 950, 1100, 800, 950, 1100]


def test_real_trend_preferred():
    trend = MonthlyTrend(labels=["T1", "T2"], data=[1, 2])
    series = monthly_trend_series(Financials(monthly_trend=trend), synthesize=True)
    assert series.labels == ["T1", "T2"]
    assert series.values == [1, 2]


def test_trend_fallback_disabled():
    assert len(monthly_trend_series(Financials(), synthesize=False)) == 0


def test_counts_series():
    series = counts_series(Counts(households=5, residents=12, temporary_residences=1))
    assert series.values == [5, 12]
    assert series.labels == ["Hộ Gia Đình", "Cư Dân"]
    assert len(counts_series(Counts(), include_temporary=True)) == 4


def test_percentage_rounding():
    assert percentage(1, 3) == 33
    assert percentage(1, 8) == 13
    assert percentage(5, 0) == 0


def test_pie_tooltip():
    assert pie_tooltip(2000000, [2000000, 1000000]) == "2.000.000 VND (67%)"
    assert pie_tooltip_title("parking: 2.000.000 VND") == "parking"


def test_screen_load_success(client, backend):
    backend.on("GET", "/api/statistics/dashboard", STATS)
    screen = DashboardScreen(client)
    assert screen.loading is True
    screen.load()

    assert screen.loading is False
    assert screen.error is None
    charts = screen.charts
    assert charts.month_name == "Tháng 5/2024"
    assert charts.counts.values == [5, 12]
    assert charts.revenue_by_type.values == [2000000, 1000000]


def test_screen_load_failure(client, backend):
    backend.on("GET", "/api/statistics/dashboard", {"message": "boom"}, status=500)
    screen = DashboardScreen(client)
    screen.load()
    assert screen.loading is False
    assert screen.error == LOAD_ERROR
    assert screen.charts is None


def test_screen_transport_failure(client, backend):
    backend.fail("GET", "/api/statistics/dashboard", httpx.ConnectError("refused"))
    screen = DashboardScreen(client)
    screen.load()
    assert screen.error == LOAD_ERROR
    assert screen.charts is None


def test_screen_load_tolerates_null_revenue_entries(client, backend):
    stats = {**STATS, "financials": {**STATS["financials"],
                                     "revenueByType": {"service": 1000000, "water": None}}}
    backend.on("GET", "/api/statistics/dashboard", stats)
    screen = DashboardScreen(client)
    screen.load()
    assert screen.error is None
    assert screen.charts.revenue_by_type.labels == ["service: 1.000.000 VND"]


def test_screen_non_json_body_reports_load_error(client, backend):
    backend.routes[("GET", "/api/statistics/dashboard")] = httpx.Response(200, text="<html>proxy</html>")
    screen = DashboardScreen(client)
    screen.load()
    assert screen.loading is False
    assert screen.error == LOAD_ERROR
    assert screen.charts is None


def test_screen_malformed_payload_reports_load_error(client, backend):
    backend.on("GET", "/api/statistics/dashboard", {"counts": {"households": "many"}})
    screen = DashboardScreen(client)
    screen.load()
    assert screen.loading is False
    assert screen.error == LOAD_ERROR
    assert screen.charts is None


def test_screen_without_token_does_not_fetch(anonymous_client, backend):
    screen = DashboardScreen(anonymous_client)
    screen.load()
    assert backend.requests == []
    assert screen.loading is False


def test_recent_payment_rows(client, backend):
    backend.on("GET", "/api/statistics/dashboard", STATS)
    rows = recent_payment_rows(DashboardScreen(client).load())
    assert rows[0] == {
        "Hộ Gia Đình": "A101", "Phí": "Phí dịch vụ", "Số Tiền": "500.000 VND", "Ngày": "3/5/2024",
    }
    assert rows[1]["Hộ Gia Đình"] == "N/A"
    assert rows[1]["Phí"] == "N/A"
