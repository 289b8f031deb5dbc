import json

import pytest

from storepulse.core.contracts import AlertType
from storepulse.reporting.assembler import (
    build_monthly_report,
    build_store_reports,
    previous_period,
    report_to_dict,
)


@pytest.mark.parametrize("month,year,expected", [
    (1, 2025, (12, 2024)),
    (3, 2025, (2, 2025)),
    (12, 2024, (11, 2024)),
])
def test_previous_period(month, year, expected):
    assert previous_period(month, year) == expected


def test_store_reports_pair_calendar_months(summary_factory, holiday_sales):
    summaries = [
        summary_factory(month=2, year=2025, revenue=80000.0),
        summary_factory(month=1, year=2025, revenue=100000.0),
        summary_factory(month=4, year=2025, revenue=120000.0),
    ]
    reports = build_store_reports(summaries, holiday_sales)

    assert [(r.year, r.month) for r in reports] == [(2025, 1), (2025, 2), (2025, 4)]

    jan, feb, apr = reports
    assert jan.root_causes == ()
    assert jan.alerts[0].type == AlertType.INFO

    assert feb.root_causes[0].metric == "Revenue"
    assert feb.alerts[0].type == AlertType.CRITICAL
    assert feb.deltas.revenue == pytest.approx(-20000.0)

    # March is missing, so April is a new baseline
    assert apr.deltas is None
    assert apr.alerts[0].metric == "Welcome"

    assert all(r.seasonal_pattern is jan.seasonal_pattern for r in reports)
    assert jan.seasonal_insights.top_months[0].month == "December"


def test_single_report_without_sales(summary_factory, previous_summary):
    report = build_monthly_report(summary_factory(revenue=118000.0), previous_summary)

    assert report.seasonal_pattern.has_enough_data is False
    assert report.seasonal_insights.strength_category == "Low"
    assert report.root_causes[0].impact == "High"


def test_report_to_dict_is_json_ready(summary_factory, previous_summary, holiday_sales):
    report = build_monthly_report(
        summary_factory(revenue=80000.0), previous_summary, sales=holiday_sales
    )
    data = report_to_dict(report)

    assert data["alerts"][0]["type"] == "critical"
    assert data["alerts"][0]["severity"] == "high"
    assert data["root_causes"][0]["direction"] == "down"
    assert data["summary"]["store_id"] == "shop-1"
    assert len(data["seasonal_pattern"]["index"]) == 12
    json.dumps(data)
