from decimal import Decimal
from typing import Mapping, Sequence

import plotly.express as px
import plotly.graph_objects as go

from tracker.aggregates import format_category
from tracker.domain import MonthlyPoint

INCOME_COLOR = "rgba(46, 204, 113, 0.8)"
EXPENSE_COLOR = "rgba(231, 76, 60, 0.8)"


def monthly_chart(series: Sequence[MonthlyPoint]) -> go.Figure:
    labels = [p.label for p in series]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=[float(p.income) for p in series], name="Income", marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=labels, y=[float(p.expense) for p in series], name="Expenses", marker_color=EXPENSE_COLOR))
    fig.update_layout(
        barmode="group",
        title="Monthly Income vs Expenses",
        yaxis_tickprefix="$",
        margin=dict(t=40, b=10, l=10, r=10),
    )
    return fig


def category_chart(breakdown: Mapping[str, Decimal]) -> go.Figure:
    fig = px.pie(
        names=[format_category(c) for c in breakdown],
        values=[float(v) for v in breakdown.values()],
        hole=0.5,
        title="Current Month Expenses by Category",
    )
    fig.update_traces(textinfo="percent+label")
    return fig
