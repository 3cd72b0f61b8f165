from bluemoon.api.schemas.statistics import Counts, Financials
from bluemoon.services.dashboard_service import counts_series, monthly_trend_series, revenue_by_type_series
from bluemoon.ui.charts import counts_bar, revenue_pie, trend_line


def test_pie_hover_shows_share():
    fig = revenue_pie(revenue_by_type_series({"service": 1000, "parking": 3000}), "Tháng 5")
    pie = fig.data[0]
    assert list(pie.values) == [3000, 1000]
    assert pie.customdata[0][0] == "parking"
    assert pie.customdata[0][1] == "3.000 VND (75%)"
    assert "Tháng 5" in fig.layout.title.text


def test_bar_and_line():
    bar = counts_bar(counts_series(Counts(households=2, residents=7)))
    assert list(bar.data[0].y) == [2, 7]
    line = trend_line(monthly_trend_series(Financials(monthly_revenue=1000), synthesize=True))
    assert len(line.data[0].x) == 6
    assert line.layout.separators == ",."
