"""
Analytics engines.

Four pure, independent functions: seasonal decomposition, seasonal
insights, root-cause attribution and alert generation.
"""

from .alerts import generate_alerts
from .root_cause import analyze_root_causes
from .seasonal_insights import derive_seasonal_insights, format_seasonal_display
from .seasonality import decompose_seasonality

__all__ = [
    "decompose_seasonality",
    "derive_seasonal_insights",
    "format_seasonal_display",
    "analyze_root_causes",
    "generate_alerts",
]
