"""
Plotly figures for the dashboard.
"""

from typing import Sequence

import plotly.express as px
import plotly.graph_objects as go

from ledger.domain import CategoryBreakdown, CategoryShare
from ledger.settings import CHART_COLORS, CHART_CONFIG, THEME_COLORS


def _template(dark: bool) -> str:
    return "plotly_dark" if dark else "plotly_white"


def _empty_figure(dark: bool) -> go.Figure:
    fig = go.Figure().add_annotation(
        text="Sem dados para o período",
        showarrow=False,
        font=dict(size=16),
    )
    fig.update_layout(template=_template(dark), height=CHART_CONFIG["height"])
    return fig


def expense_share_pie(shares: Sequence[CategoryShare], dark: bool = False) -> go.Figure:
    """Pie of expenses per category."""
    if not shares:
        return _empty_figure(dark)

    fig = px.pie(
        names=[s.category for s in shares],
        values=[float(s.amount) for s in shares],
        color_discrete_sequence=CHART_COLORS,
        template=_template(dark),
    )
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(height=CHART_CONFIG["height"], margin=CHART_CONFIG["margin"], showlegend=False)
    return fig


def income_expense_bar(breakdown: Sequence[CategoryBreakdown], dark: bool = False) -> go.Figure:
    """Grouped bars of income and expense per category."""
    if not breakdown:
        return _empty_figure(dark)

    categories = [row.category for row in breakdown]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Receitas",
        x=categories,
        y=[float(row.income_total) for row in breakdown],
        marker_color=THEME_COLORS["income"],
    ))
    fig.add_trace(go.Bar(
        name="Despesas",
        x=categories,
        y=[float(row.expense_total) for row in breakdown],
        marker_color=THEME_COLORS["expense"],
    ))
    fig.update_layout(
        barmode="group",
        template=_template(dark),
        height=CHART_CONFIG["height"],
        margin=CHART_CONFIG["margin"],
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig
