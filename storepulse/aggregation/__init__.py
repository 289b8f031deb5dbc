"""Order ingestion: raw orders -> monthly summaries and sales series."""

from .monthly import (
    build_monthly_sales,
    build_monthly_summaries,
    resolve_order_column,
)

__all__ = [
    "build_monthly_sales",
    "build_monthly_summaries",
    "resolve_order_column",
]
