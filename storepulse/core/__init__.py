"""Core record types shared by the engines and their collaborators."""

from .contracts import (
    AbandonedCarts,
    Alert,
    AlertType,
    Direction,
    Impact,
    MetricDeltas,
    MetricKind,
    MonthlySalesPoint,
    MonthlySummary,
    MonthRank,
    RootCause,
    RootCauseResult,
    SeasonalInsights,
    SeasonalPattern,
    SeasonalRecommendation,
    Severity,
)

__all__ = [
    "AbandonedCarts",
    "Alert",
    "AlertType",
    "Direction",
    "Impact",
    "MetricDeltas",
    "MetricKind",
    "MonthlySalesPoint",
    "MonthlySummary",
    "MonthRank",
    "RootCause",
    "RootCauseResult",
    "SeasonalInsights",
    "SeasonalPattern",
    "SeasonalRecommendation",
    "Severity",
]
