"""
StorePulse

Deterministic month-over-month analytics for e-commerce stores:
seasonal decomposition, root-cause attribution and threshold alerts.
"""

from .__version__ import __version__

# Engines and record types only; ingestion, reporting and visuals are
# imported explicitly by callers.
from .analytics import (
    analyze_root_causes,
    decompose_seasonality,
    derive_seasonal_insights,
    format_seasonal_display,
    generate_alerts,
)
from .core.contracts import (
    AbandonedCarts,
    Alert,
    MonthlySalesPoint,
    MonthlySummary,
    RootCause,
    SeasonalPattern,
)

__all__ = [
    "__version__",
    "analyze_root_causes",
    "decompose_seasonality",
    "derive_seasonal_insights",
    "format_seasonal_display",
    "generate_alerts",
    "AbandonedCarts",
    "Alert",
    "MonthlySalesPoint",
    "MonthlySummary",
    "RootCause",
    "SeasonalPattern",
]
