"""Plotly figures for the dashboard, drawn from ``ChartSeries``."""
from __future__ import annotations

import plotly.graph_objects as go

from bluemoon.services.dashboard_service import (
    ChartSeries,
    pie_tooltip,
    pie_tooltip_title,
    value_tooltip,
)

# vi-VN: "," for decimals, "." between thousands
_SEPARATORS = ",."
_HEIGHT = 300


def _layout(fig: go.Figure, title: str, **kwargs) -> go.Figure:
    fig.update_layout(
        title={"text": title, "font": {"size": 14}},
        height=_HEIGHT,
        margin={"l": 10, "r": 10, "t": 40, "b": 10},
        separators=_SEPARATORS,
        **kwargs,
    )
    return fig


def revenue_pie(series: ChartSeries, month_name: str | None = None) -> go.Figure:
    month = month_name or "tháng hiện tại"
    fig = go.Figure(go.Pie(
        labels=series.labels,
        values=series.values,
        name=series.dataset_label,
        marker={"colors": series.background_colors,
                "line": {"color": series.border_colors, "width": 1}},
        customdata=[
            [pie_tooltip_title(label), pie_tooltip(value, series.values)]
            for label, value in zip(series.labels, series.values)
        ],
        hovertemplate="<b>%{customdata[0]}</b><br>%{customdata[1]}<extra></extra>",
        textinfo="percent",
        sort=False,
    ))
    return _layout(
        fig, f"Tỷ lệ doanh thu {month} theo loại phí",
        legend={"orientation": "v", "x": 1.0, "font": {"size": 12}},
    )


def counts_bar(series: ChartSeries) -> go.Figure:
    fig = go.Figure(go.Bar(
        x=series.labels,
        y=series.values,
        name=series.dataset_label,
        marker={"color": series.background_colors,
                "line": {"color": series.border_colors, "width": 1}},
    ))
    fig.update_yaxes(rangemode="tozero", title_text="Số lượng")
    return _layout(fig, "Số lượng đối tượng quản lý", showlegend=False)


def trend_line(series: ChartSeries) -> go.Figure:
    line_color = series.border_colors[0] if series.border_colors else None
    fill_color = series.background_colors[0] if series.background_colors else None
    fig = go.Figure(go.Scatter(
        x=series.labels,
        y=series.values,
        name=series.dataset_label,
        mode="lines+markers",
        line={"color": line_color, "shape": "spline", "smoothing": 0.3},
        marker={"color": fill_color},
        customdata=[value_tooltip(series.dataset_label, v) for v in series.values],
        hovertemplate="%{customdata}<extra></extra>",
    ))
    fig.update_yaxes(rangemode="tozero", title_text="Doanh thu (VND)", tickformat=",d")
    return _layout(
        fig, "Doanh thu 6 tháng gần nhất",
        showlegend=True, legend={"orientation": "h", "y": 1.1},
    )
