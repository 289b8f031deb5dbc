"""
Fixed weights, thresholds and message templates for the analytics engines.

All tables are read-only mappings keyed by enums. They are deliberately not
exposed through the config layer: the same inputs must always produce the
same root causes and alerts.
"""

from types import MappingProxyType

from storepulse.core.contracts import Direction, Impact, MetricKind


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)


# -------------------------------------------------
# SEASONALITY
# -------------------------------------------------
SEASONAL_WINDOW = 12
MIN_SEASONAL_POINTS = 12

STRENGTH_HIGH = 0.7
STRENGTH_MEDIUM = 0.4
STRENGTH_CAMPAIGN = 0.6


# -------------------------------------------------
# ROOT CAUSE ATTRIBUTION
# -------------------------------------------------
METRIC_WEIGHTS = MappingProxyType({
    MetricKind.REVENUE: 1.0,
    MetricKind.ORDERS: 0.9,
    MetricKind.AOV: 0.8,
    MetricKind.RETURNING_CUSTOMER_RATE: 0.85,
    MetricKind.CONVERSION_RATE: 0.7,
    MetricKind.AVG_SHIPPING_TIME: 0.5,
})

# Minimum |percent change| for a metric to count as a root cause.
INCLUSION_THRESHOLDS = MappingProxyType({
    MetricKind.REVENUE: 5.0,
    MetricKind.ORDERS: 5.0,
    MetricKind.AOV: 5.0,
    MetricKind.RETURNING_CUSTOMER_RATE: 5.0,
    MetricKind.CONVERSION_RATE: 5.0,
    MetricKind.AVG_SHIPPING_TIME: 10.0,
})

# Metrics that are only compared when both periods report them.
OPTIONAL_METRICS = frozenset({
    MetricKind.CONVERSION_RATE,
    MetricKind.AVG_SHIPPING_TIME,
})

# (minimum weighted change, impact), checked in order
IMPACT_TIERS = (
    (15.0, Impact.HIGH),
    (7.0, Impact.MEDIUM),
)

MAX_ROOT_CAUSES = 5

EXPLANATION_TEMPLATES = MappingProxyType({
    (MetricKind.REVENUE, Direction.UP):
        "Revenue increased by {p}% compared to last month",
    (MetricKind.REVENUE, Direction.DOWN):
        "Revenue dropped by {p}% compared to last month",
    (MetricKind.ORDERS, Direction.UP):
        "Order volume increased by {p}%",
    (MetricKind.ORDERS, Direction.DOWN):
        "Fewer orders received - order count decreased by {p}%",
    (MetricKind.AOV, Direction.UP):
        "Average order value increased by {p}% - customers spending more per purchase",
    (MetricKind.AOV, Direction.DOWN):
        "Average order value declined by {p}% - customers spending less per order",
    (MetricKind.RETURNING_CUSTOMER_RATE, Direction.UP):
        "More repeat customers - returning customer rate improved by {p}%",
    (MetricKind.RETURNING_CUSTOMER_RATE, Direction.DOWN):
        "Fewer repeat customers - returning customer rate fell by {p}%",
    (MetricKind.CONVERSION_RATE, Direction.UP):
        "Conversion rate improved by {p}% - more visitors becoming customers",
    (MetricKind.CONVERSION_RATE, Direction.DOWN):
        "Conversion rate declined by {p}% - fewer visitors completing purchases",
    (MetricKind.AVG_SHIPPING_TIME, Direction.UP):
        "Shipping time increased by {p}% - orders taking longer to fulfill",
    (MetricKind.AVG_SHIPPING_TIME, Direction.DOWN):
        "Shipping time decreased by {p}% - faster order fulfillment",
})


# -------------------------------------------------
# ALERTS
# -------------------------------------------------
REVENUE_CRITICAL_PCT = 20.0
REVENUE_WARNING_PCT = 10.0
AOV_CRITICAL_PCT = 25.0
RETURNING_RATE_PCT = 5.0
CONVERSION_DECLINE_PCT = 15.0
SHIPPING_CRITICAL_DAYS = 2.0
SHIPPING_WARNING_DAYS = 1.0
SHIPPING_IMPROVED_DAYS = -1.0

DEFAULT_RECOVERY_RATE = 0.2
CART_RECOVERY_MIN = 500.0

MAX_ALERTS = 5
