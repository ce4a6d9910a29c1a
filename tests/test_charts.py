from decimal import Decimal

from tracker.charts import category_chart, monthly_chart
from tracker.domain import MonthlyPoint


def test_monthly_chart_has_income_and_expense_bars():
    series = (
        MonthlyPoint("Apr 2024", Decimal("100"), Decimal("40")),
        MonthlyPoint("May 2024", Decimal("0"), Decimal("12.5")),
    )
    fig = monthly_chart(series)
    assert [trace.name for trace in fig.data] == ["Income", "Expenses"]
    assert list(fig.data[0].x) == ["Apr 2024", "May 2024"]
    assert list(fig.data[1].y) == [40.0, 12.5]


def test_category_chart_is_doughnut():
    fig = category_chart({"food": Decimal("80"), "side_hustle": Decimal("20")})
    pie = fig.data[0]
    assert pie.hole == 0.5
    assert list(pie.labels) == ["Food", "Side Hustle"]
    assert list(pie.values) == [80.0, 20.0]
