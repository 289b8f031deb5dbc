"""
Alert Rules Engine

Evaluates the month-over-month comparison against fixed thresholds and
emits user-facing alerts. Each rule contributes at most one alert: when a
metric crosses several tiers only the highest one is reported.
"""

import logging
from typing import List, Optional

from storepulse.analytics import rules
from storepulse.core.contracts import (
    Alert,
    AlertType,
    MonthlySummary,
    Severity,
)
from storepulse.reporting.formatters import fmt_amount

log = logging.getLogger("storepulse.alerts")


def _relative_change(current: float, previous: float) -> float:
    # Alert rules only compare against a positive base.
    return (current - previous) / previous * 100 if previous > 0 else 0.0


def welcome_alert() -> Alert:
    return Alert(
        type=AlertType.INFO,
        severity=Severity.LOW,
        metric="Welcome",
        message=(
            "This is your baseline month. Alerts will appear next month "
            "when we can compare data."
        ),
        actionable=False,
    )


# =====================================================
# RULES
# =====================================================

def _revenue_alert(current: MonthlySummary, previous: MonthlySummary) -> Optional[Alert]:
    change = current.revenue - previous.revenue
    pct = _relative_change(current.revenue, previous.revenue)
    amount = fmt_amount(abs(change))
    rising = change > 0

    if abs(pct) >= rules.REVENUE_CRITICAL_PCT:
        return Alert(
            type=AlertType.SUCCESS if rising else AlertType.CRITICAL,
            severity=Severity.HIGH,
            metric="Revenue",
            change=change,
            change_percent=pct,
            message=(
                f"Revenue surged by ${amount} ({pct:.1f}%) - your best month yet!"
                if rising else
                f"Revenue dropped by ${amount} ({abs(pct):.1f}%) - immediate attention needed"
            ),
            link="#root-causes",
            actionable=True,
        )

    if abs(pct) >= rules.REVENUE_WARNING_PCT:
        return Alert(
            type=AlertType.SUCCESS if rising else AlertType.WARNING,
            severity=Severity.MEDIUM,
            metric="Revenue",
            change=change,
            change_percent=pct,
            message=(
                f"Revenue up ${amount} ({pct:.1f}%)"
                if rising else
                f"Revenue down ${amount} ({abs(pct):.1f}%)"
            ),
            link="#root-causes",
            actionable=True,
        )

    return None


def _aov_alert(current: MonthlySummary, previous: MonthlySummary) -> Optional[Alert]:
    change = current.aov - previous.aov
    pct = _relative_change(current.aov, previous.aov)

    if abs(pct) < rules.AOV_CRITICAL_PCT:
        return None

    if change > 0:
        return Alert(
            type=AlertType.SUCCESS,
            severity=Severity.HIGH,
            metric="AOV",
            change=change,
            change_percent=pct,
            message=f"AOV climbed to ${current.aov:.2f} (up {pct:.1f}%)",
            link="#root-causes",
            actionable=True,
        )

    return Alert(
        type=AlertType.CRITICAL,
        severity=Severity.MEDIUM,
        metric="AOV",
        change=change,
        change_percent=pct,
        message=f"AOV dropped to ${current.aov:.2f} (down {abs(pct):.1f}%)",
        link="#root-causes",
        actionable=True,
    )


def _returning_customers_alert(
    current: MonthlySummary,
    previous: MonthlySummary,
) -> Optional[Alert]:
    change = current.returning_customer_rate - previous.returning_customer_rate
    pct = _relative_change(current.returning_customer_rate, previous.returning_customer_rate)

    if change < 0 and abs(pct) >= rules.RETURNING_RATE_PCT:
        return Alert(
            type=AlertType.WARNING,
            severity=Severity.MEDIUM,
            metric="Returning Customers",
            change=change,
            change_percent=pct,
            message=(
                f"Returning customers dropped sharply ({abs(pct):.1f}% decrease) "
                "- consider a win-back campaign"
            ),
            link="#recommendations",
            actionable=True,
        )

    if change > 0 and pct >= rules.RETURNING_RATE_PCT:
        return Alert(
            type=AlertType.SUCCESS,
            severity=Severity.MEDIUM,
            metric="Returning Customers",
            change=change,
            change_percent=pct,
            message=f"Customer loyalty improving - returning rate up {pct:.1f}%",
            actionable=False,
        )

    return None


def _conversion_alert(current: MonthlySummary, previous: MonthlySummary) -> Optional[Alert]:
    if current.conversion_rate is None or previous.conversion_rate is None:
        return None

    change = current.conversion_rate - previous.conversion_rate
    pct = _relative_change(current.conversion_rate, previous.conversion_rate)

    if change < 0 and abs(pct) >= rules.CONVERSION_DECLINE_PCT:
        return Alert(
            type=AlertType.WARNING,
            severity=Severity.MEDIUM,
            metric="Conversion Rate",
            change=change,
            change_percent=pct,
            message=f"Conversion rate down {abs(pct):.1f}% - check your funnel",
            actionable=True,
        )

    return None


def _shipping_alert(current: MonthlySummary, previous: MonthlySummary) -> Optional[Alert]:
    if current.avg_shipping_time is None or previous.avg_shipping_time is None:
        return None

    change = current.avg_shipping_time - previous.avg_shipping_time

    if change >= rules.SHIPPING_CRITICAL_DAYS:
        return Alert(
            type=AlertType.CRITICAL,
            severity=Severity.HIGH,
            metric="Shipping Time",
            change=change,
            message=(
                f"Shipping times increased by {change:.1f} days "
                "- customers are waiting longer"
            ),
            actionable=True,
        )

    if change >= rules.SHIPPING_WARNING_DAYS:
        return Alert(
            type=AlertType.WARNING,
            severity=Severity.MEDIUM,
            metric="Shipping Time",
            change=change,
            message=f"Shipping times up {change:.1f} days - monitor fulfillment",
            actionable=True,
        )

    if change <= rules.SHIPPING_IMPROVED_DAYS:
        return Alert(
            type=AlertType.SUCCESS,
            severity=Severity.LOW,
            metric="Shipping Time",
            change=change,
            message=f"Shipping times improved by {abs(change):.1f} days - great work!",
            actionable=False,
        )

    return None


def _cart_recovery_alert(current: MonthlySummary) -> Optional[Alert]:
    carts = current.abandoned_carts
    if carts is None:
        return None

    rate = carts.recovery_rate or rules.DEFAULT_RECOVERY_RATE
    recoverable = carts.potential_revenue * rate

    if recoverable > rules.CART_RECOVERY_MIN:
        return Alert(
            type=AlertType.OPPORTUNITY,
            severity=Severity.MEDIUM,
            metric="Cart Recovery",
            change=recoverable,
            message=(
                f"${fmt_amount(recoverable)} sitting in abandoned carts "
                "- quick wins available"
            ),
            link="#recommendations",
            actionable=True,
        )

    return None


# =====================================================
# PUBLIC API
# =====================================================

def generate_alerts(
    current: MonthlySummary,
    previous: Optional[MonthlySummary],
) -> List[Alert]:
    """
    Compare two consecutive months and return at most five alerts,
    ordered high -> medium -> low severity.

    Without a previous month a single informational baseline alert is
    returned.
    """
    if previous is None:
        return [welcome_alert()]

    candidates = [
        _revenue_alert(current, previous),
        _aov_alert(current, previous),
        _returning_customers_alert(current, previous),
        _conversion_alert(current, previous),
        _shipping_alert(current, previous),
        _cart_recovery_alert(current),
    ]
    alerts = [a for a in candidates if a is not None]
    alerts.sort(key=lambda a: a.severity.order)

    if len(alerts) > rules.MAX_ALERTS:
        log.debug("Dropping %s lower-severity alerts", len(alerts) - rules.MAX_ALERTS)

    return alerts[:rules.MAX_ALERTS]
