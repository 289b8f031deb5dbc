from datetime import date

import pandas as pd
import pytest

from storepulse.core.contracts import MonthlySalesPoint, MonthlySummary


def make_summary(**overrides) -> MonthlySummary:
    values = {
        "store_id": "shop-1",
        "month": 5,
        "year": 2025,
        "revenue": 100000.0,
        "orders": 2000,
        "aov": 50.0,
        "returning_customer_rate": 0.30,
        "units_sold": 2600,
        "conversion_rate": None,
        "avg_shipping_time": None,
        "abandoned_carts": None,
    }
    values.update(overrides)
    return MonthlySummary(**values)


def make_sales(units_by_month, years=2, start_year=2023):
    """units_by_month: callable(month_number_1_12) -> units"""
    return [
        MonthlySalesPoint(date=date(start_year + y, m, 1), units=units_by_month(m))
        for y in range(years)
        for m in range(1, 13)
    ]


@pytest.fixture
def previous_summary():
    return make_summary(month=4)


@pytest.fixture
def holiday_sales():
    """
    Deterministic 24-month series: flat 100 units with
    November / December peaks.
    """
    peaks = {11: 180, 12: 200}
    return make_sales(lambda m: peaks.get(m, 100))


@pytest.fixture
def flat_sales():
    return make_sales(lambda m: 100, years=3)


@pytest.fixture
def orders_df():
    """
    Two months of orders. Customer c1 orders twice in January.
    """
    return pd.DataFrame({
        "order_id": ["#1", "#2", "#3", "#4", "#5"],
        "created_at": [
            "2025-01-03T10:00:00",
            "2025-01-15T12:30:00",
            "2025-01-20T08:00:00",
            "2025-02-02T09:00:00",
            "2025-02-25T17:45:00",
        ],
        "total_price": [100.0, 50.0, 150.0, 80.0, 120.0],
        "line_items": [2, 1, 3, 1, 2],
        "customer_id": ["c1", "c1", "c2", "c3", "c4"],
        "shipping_days": [2.0, 3.0, 4.0, 5.0, 5.0],
    })


@pytest.fixture
def summary_factory():
    return make_summary


@pytest.fixture
def sales_factory():
    return make_sales
