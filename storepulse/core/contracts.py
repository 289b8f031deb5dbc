from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from dateutil import parser as date_parser


# =====================================================
# ENUMS
# =====================================================

class MetricKind(str, Enum):
    REVENUE = "revenue"
    ORDERS = "orders"
    AOV = "aov"
    RETURNING_CUSTOMER_RATE = "returning_customer_rate"
    CONVERSION_RATE = "conversion_rate"
    AVG_SHIPPING_TIME = "avg_shipping_time"

    @property
    def label(self) -> str:
        return _METRIC_LABELS[self]


_METRIC_LABELS = {
    MetricKind.REVENUE: "Revenue",
    MetricKind.ORDERS: "Orders",
    MetricKind.AOV: "Average Order Value",
    MetricKind.RETURNING_CUSTOMER_RATE: "Returning Customers",
    MetricKind.CONVERSION_RATE: "Conversion Rate",
    MetricKind.AVG_SHIPPING_TIME: "Shipping Time",
}


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"

    @classmethod
    def of(cls, change: float) -> "Direction":
        return cls.UP if change > 0 else cls.DOWN


class Impact(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return {"High": 3, "Medium": 2, "Low": 1}[self.value]


class AlertType(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    CRITICAL = "critical"
    INFO = "info"
    OPPORTUNITY = "opportunity"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def order(self) -> int:
        # high sorts first
        return {"high": 0, "medium": 1, "low": 2}[self.value]


# =====================================================
# INPUT RECORDS
# =====================================================

@dataclass(frozen=True)
class AbandonedCarts:
    count: int = 0
    potential_revenue: float = 0.0
    recovery_rate: Optional[float] = None


@dataclass(frozen=True)
class MonthlySummary:
    """
    Aggregated metrics for one store and one calendar month.

    Produced by the summary provider and never mutated afterwards.
    `aov` is expected to equal revenue / orders when orders > 0; the
    analytics engines do not check it.
    """
    store_id: str
    month: int
    year: int
    revenue: float
    orders: int
    aov: float
    returning_customer_rate: float
    units_sold: int = 0
    conversion_rate: Optional[float] = None
    avg_shipping_time: Optional[float] = None
    abandoned_carts: Optional[AbandonedCarts] = None

    def value_of(self, metric: MetricKind) -> Optional[float]:
        return getattr(self, metric.value)


@dataclass(frozen=True)
class MonthlySalesPoint:
    date: date
    units: int

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "MonthlySalesPoint":
        """Build a point from a loose record; string dates are parsed."""
        raw = record["date"]
        if isinstance(raw, str):
            raw = date_parser.parse(raw)
        if isinstance(raw, datetime):
            raw = raw.date()
        return cls(date=raw.replace(day=1), units=int(record["units"]))


# =====================================================
# SEASONALITY
# =====================================================

@dataclass(frozen=True)
class SeasonalPattern:
    index: Tuple[float, ...]
    strength: float
    trend: Tuple[Optional[float], ...]
    has_enough_data: bool


@dataclass(frozen=True)
class MonthRank:
    month: str
    month_number: int
    index: float
    change: float


@dataclass(frozen=True)
class SeasonalRecommendation:
    type: str
    priority: str
    title: str
    description: str


@dataclass(frozen=True)
class SeasonalInsights:
    top_months: Tuple[MonthRank, ...]
    bottom_months: Tuple[MonthRank, ...]
    strength_category: str
    strength_description: str
    recommendations: Tuple[SeasonalRecommendation, ...]
    monthly_data: Tuple[MonthRank, ...]


# =====================================================
# ROOT CAUSES
# =====================================================

@dataclass(frozen=True)
class MetricDeltas:
    """Absolute current-minus-previous change per tracked metric."""
    revenue: float
    orders: float
    aov: float
    returning_customer_rate: float
    conversion_rate: Optional[float] = None
    avg_shipping_time: Optional[float] = None


@dataclass(frozen=True)
class RootCause:
    metric: str
    change: float
    change_percent: float
    impact: Impact
    explanation: str
    direction: Direction


@dataclass(frozen=True)
class RootCauseResult:
    root_causes: Tuple[RootCause, ...] = ()
    deltas: Optional[MetricDeltas] = None


# =====================================================
# ALERTS
# =====================================================

Number = Union[int, float]


@dataclass(frozen=True)
class Alert:
    type: AlertType
    severity: Severity
    metric: str
    message: str
    actionable: bool
    change: Optional[Number] = None
    change_percent: Optional[float] = None
    link: Optional[str] = None
    read: bool = field(default=False)
