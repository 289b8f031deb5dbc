import pytest

from storepulse.analytics.alerts import generate_alerts
from storepulse.core.contracts import AbandonedCarts, AlertType, Severity


def _only(alerts, metric):
    matching = [a for a in alerts if a.metric == metric]
    assert len(matching) <= 1
    return matching[0] if matching else None


def test_baseline_month_gets_welcome_alert(summary_factory):
    alerts = generate_alerts(summary_factory(), None)

    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.type == AlertType.INFO
    assert alert.severity == Severity.LOW
    assert alert.metric == "Welcome"
    assert alert.actionable is False
    assert alert.read is False


def test_no_change_no_alerts(summary_factory, previous_summary):
    assert generate_alerts(summary_factory(), previous_summary) == []


def test_revenue_drop_is_critical(summary_factory, previous_summary):
    alerts = generate_alerts(summary_factory(revenue=80000.0), previous_summary)

    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.metric == "Revenue"
    assert alert.type == AlertType.CRITICAL
    assert alert.severity == Severity.HIGH
    assert alert.change == pytest.approx(-20000.0)
    assert alert.change_percent == pytest.approx(-20.0)
    assert "$20,000" in alert.message
    assert alert.actionable is True


@pytest.mark.parametrize("revenue,alert_type,severity", [
    (125000.0, AlertType.SUCCESS, Severity.HIGH),
    (115000.0, AlertType.SUCCESS, Severity.MEDIUM),
    (85000.0, AlertType.WARNING, Severity.MEDIUM),
])
def test_revenue_tiers(summary_factory, previous_summary, revenue, alert_type, severity):
    alert = _only(generate_alerts(summary_factory(revenue=revenue), previous_summary), "Revenue")

    assert alert.type == alert_type
    assert alert.severity == severity


def test_small_revenue_change_no_alert(summary_factory, previous_summary):
    alerts = generate_alerts(summary_factory(revenue=105000.0), previous_summary)
    assert _only(alerts, "Revenue") is None


def test_revenue_without_previous_base(summary_factory):
    previous = summary_factory(month=4, revenue=0.0)
    alerts = generate_alerts(summary_factory(revenue=5000.0), previous)
    assert _only(alerts, "Revenue") is None


def test_small_aov_change_no_alert(summary_factory):
    previous = summary_factory(month=4, aov=50.0)
    alerts = generate_alerts(summary_factory(aov=51.5), previous)
    assert _only(alerts, "AOV") is None


def test_aov_jump_and_drop(summary_factory):
    previous = summary_factory(month=4, aov=50.0)

    up = _only(generate_alerts(summary_factory(aov=65.0), previous), "AOV")
    assert up.type == AlertType.SUCCESS
    assert up.severity == Severity.HIGH

    down = _only(generate_alerts(summary_factory(aov=35.0), previous), "AOV")
    assert down.type == AlertType.CRITICAL
    assert down.severity == Severity.MEDIUM
    assert "$35.00" in down.message


def test_aov_between_tiers_no_alert(summary_factory):
    previous = summary_factory(month=4, aov=50.0)
    alerts = generate_alerts(summary_factory(aov=60.0), previous)
    assert _only(alerts, "AOV") is None


def test_returning_customers(summary_factory, previous_summary):
    down = _only(
        generate_alerts(summary_factory(returning_customer_rate=0.27), previous_summary),
        "Returning Customers",
    )
    assert down.type == AlertType.WARNING
    assert down.severity == Severity.MEDIUM
    assert down.actionable is True
    assert "win-back" in down.message

    up = _only(
        generate_alerts(summary_factory(returning_customer_rate=0.33), previous_summary),
        "Returning Customers",
    )
    assert up.type == AlertType.SUCCESS
    assert up.severity == Severity.MEDIUM
    assert up.actionable is False


def test_conversion_decline(summary_factory):
    previous = summary_factory(month=4, conversion_rate=0.03)

    drop = _only(generate_alerts(summary_factory(conversion_rate=0.024), previous), "Conversion Rate")
    assert drop.type == AlertType.WARNING
    assert drop.severity == Severity.MEDIUM

    assert _only(generate_alerts(summary_factory(conversion_rate=0.04), previous), "Conversion Rate") is None
    assert _only(generate_alerts(summary_factory(conversion_rate=None), previous), "Conversion Rate") is None


@pytest.mark.parametrize("current,alert_type,severity", [
    (5.5, AlertType.CRITICAL, Severity.HIGH),
    (4.2, AlertType.WARNING, Severity.MEDIUM),
    (2.0, AlertType.SUCCESS, Severity.LOW),
])
def test_shipping_tiers(summary_factory, current, alert_type, severity):
    previous = summary_factory(month=4, avg_shipping_time=3.0)
    alert = _only(generate_alerts(summary_factory(avg_shipping_time=current), previous), "Shipping Time")

    assert alert.type == alert_type
    assert alert.severity == severity
    assert alert.change_percent is None


def test_shipping_small_change_no_alert(summary_factory):
    previous = summary_factory(month=4, avg_shipping_time=3.0)
    alerts = generate_alerts(summary_factory(avg_shipping_time=2.5), previous)
    assert _only(alerts, "Shipping Time") is None


def test_cart_recovery_opportunity(summary_factory, previous_summary):
    carts = AbandonedCarts(count=40, potential_revenue=3000.0)
    alert = _only(
        generate_alerts(summary_factory(abandoned_carts=carts), previous_summary),
        "Cart Recovery",
    )

    assert alert.type == AlertType.OPPORTUNITY
    assert alert.severity == Severity.MEDIUM
    assert alert.change == pytest.approx(600.0)
    assert "abandoned carts" in alert.message


def test_cart_recovery_below_minimum(summary_factory, previous_summary):
    carts = AbandonedCarts(count=30, potential_revenue=2000.0)
    alerts = generate_alerts(summary_factory(abandoned_carts=carts), previous_summary)
    assert _only(alerts, "Cart Recovery") is None

    carts = AbandonedCarts(count=30, potential_revenue=2000.0, recovery_rate=0.3)
    alerts = generate_alerts(summary_factory(abandoned_carts=carts), previous_summary)
    assert _only(alerts, "Cart Recovery") is not None


def test_cart_recovery_zero_rate_uses_default(summary_factory, previous_summary):
    carts = AbandonedCarts(count=40, potential_revenue=3000.0, recovery_rate=0.0)
    alert = _only(
        generate_alerts(summary_factory(abandoned_carts=carts), previous_summary),
        "Cart Recovery",
    )

    assert alert is not None
    assert alert.change == pytest.approx(600.0)


def test_sorted_by_severity_and_truncated(summary_factory):
    previous = summary_factory(month=4, conversion_rate=0.03, avg_shipping_time=3.0)
    current = summary_factory(
        revenue=75000.0,
        aov=65.0,
        returning_customer_rate=0.25,
        conversion_rate=0.02,
        avg_shipping_time=6.0,
        abandoned_carts=AbandonedCarts(count=50, potential_revenue=5000.0),
    )
    alerts = generate_alerts(current, previous)

    assert len(alerts) == 5
    orders = [a.severity.order for a in alerts]
    assert orders == sorted(orders)
    assert [a.metric for a in alerts[:3]] == ["Revenue", "AOV", "Shipping Time"]
    assert "Cart Recovery" not in [a.metric for a in alerts]
