"""
Monthly Summary Provider

Turns raw order records into the per-month inputs of the analytics
engines:

- MonthlySummary per calendar month (revenue, orders, AOV, returning
  customer rate, units, optional shipping / conversion / cart metrics)
- MonthlySalesPoint series for seasonal decomposition

Input validation lives here: the engines assume well-formed records.
"""

import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

from storepulse.config.settings import ColumnConfig
from storepulse.core.contracts import AbandonedCarts, MonthlySalesPoint, MonthlySummary

log = logging.getLogger("storepulse.aggregation")


# =====================================================
# COLUMN ALIASES
# =====================================================

ORDER_COLUMN_ALIASES: Dict[str, List[str]] = {
    "date": ["created_at", "order_date", "date", "timestamp", "createdat"],
    "revenue": ["total_price", "totalprice", "revenue", "sales", "amount", "order_total"],
    "units": ["line_items", "lineitems", "quantity", "qty", "units"],
    "customer": ["customer_id", "customerid", "cust_id", "customer"],
    "order_id": ["order_id", "orderid", "id"],
    "shipping_days": ["shipping_days", "shipping_time", "days_to_ship", "fulfillment_days"],
}

REQUIRED_ORDER_COLUMNS = ("date", "revenue")


def _normalise(name: str) -> str:
    return str(name).strip().lower().replace(" ", "_")


def resolve_order_column(
    df: pd.DataFrame,
    key: str,
    override: Optional[str] = None,
) -> Optional[str]:
    """
    Resolve a logical order column to an actual dataframe column.

    An explicit override wins when present in the frame; otherwise the
    first alias matching case-insensitively is used.
    """
    if override and override in df.columns:
        return override

    lookup = {_normalise(c): c for c in df.columns}
    for alias in ORDER_COLUMN_ALIASES.get(key, []):
        if alias in lookup:
            return lookup[alias]
    return None


def _resolve_columns(df: pd.DataFrame, columns: Optional[ColumnConfig]) -> Dict[str, Optional[str]]:
    columns = columns or ColumnConfig()
    resolved = {
        key: resolve_order_column(df, key, getattr(columns, key))
        for key in ORDER_COLUMN_ALIASES
    }

    for key in REQUIRED_ORDER_COLUMNS:
        if resolved[key] is None:
            tried = [getattr(columns, key)] if getattr(columns, key) else []
            tried += ORDER_COLUMN_ALIASES[key]
            raise ValueError(f"Required '{key}' column not found. Tried: {tried}")

    return resolved


def _wall_clock(value) -> pd.Timestamp:
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return pd.NaT
    # keep the local time, drop the offset
    return ts.tz_localize(None) if ts.tzinfo is not None else ts


def _local_timestamps(values: pd.Series) -> pd.Series:
    """
    Parse order timestamps value by value so mixed UTC offsets
    (daylight saving) each keep their own wall-clock time.
    """
    return pd.to_datetime(values.map(_wall_clock), errors="coerce")


def _prepare_orders(orders: pd.DataFrame, cols: Dict[str, Optional[str]]) -> pd.DataFrame:
    if cols["order_id"]:
        duplicated = orders[cols["order_id"]].duplicated()
        if duplicated.any():
            log.warning("Dropping %s duplicate order ids", int(duplicated.sum()))
            orders = orders[~duplicated]

    df = pd.DataFrame({
        "created_at": _local_timestamps(orders[cols["date"]]),
        "revenue": pd.to_numeric(orders[cols["revenue"]], errors="coerce").fillna(0.0),
    })

    if cols["units"]:
        df["units"] = pd.to_numeric(orders[cols["units"]], errors="coerce").fillna(0)
    else:
        df["units"] = 1

    df["customer"] = orders[cols["customer"]] if cols["customer"] else None

    if cols["shipping_days"]:
        df["shipping_days"] = pd.to_numeric(orders[cols["shipping_days"]], errors="coerce")

    invalid = df["created_at"].isna()
    if invalid.any():
        log.warning("Dropping %s orders with unparseable dates", int(invalid.sum()))
        df = df[~invalid].copy()

    df["period"] = df["created_at"].dt.to_period("M")
    return df


def _returning_rate(customers: pd.Series) -> float:
    customers = customers.dropna()
    if customers.empty:
        return 0.0
    counts = customers.value_counts()
    return float((counts > 1).sum() / len(counts))


def _extras_by_period(extras: Optional[pd.DataFrame]) -> Dict[tuple, dict]:
    if extras is None or extras.empty:
        return {}

    lookup = {}
    for record in extras.to_dict(orient="records"):
        lookup[(int(record["year"]), int(record["month"]))] = record
    return lookup


def _abandoned_carts(extra: dict) -> Optional[AbandonedCarts]:
    revenue = extra.get("abandoned_cart_revenue")
    if revenue is None or pd.isna(revenue):
        return None

    count = extra.get("abandoned_cart_count")
    rate = extra.get("recovery_rate")
    return AbandonedCarts(
        count=int(count) if count is not None and not pd.isna(count) else 0,
        potential_revenue=float(revenue),
        recovery_rate=float(rate) if rate is not None and not pd.isna(rate) else None,
    )


def _optional_float(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


# =====================================================
# PUBLIC API
# =====================================================

def build_monthly_summaries(
    orders: pd.DataFrame,
    store_id: str,
    columns: Optional[ColumnConfig] = None,
    extras: Optional[pd.DataFrame] = None,
) -> List[MonthlySummary]:
    """
    Aggregate order records into one MonthlySummary per month with orders.

    Args:
        orders: one row per order
        store_id: store the orders belong to
        columns: explicit column names (aliases used otherwise)
        extras: optional month-level metrics keyed by `year`, `month`
            (conversion_rate, abandoned_cart_count, abandoned_cart_revenue,
            recovery_rate)

    Returns:
        Summaries sorted by (year, month).
    """
    cols = _resolve_columns(orders, columns)
    df = _prepare_orders(orders, cols)
    extra_lookup = _extras_by_period(extras)

    summaries = []
    for period, group in df.groupby("period", sort=True):
        order_count = int(len(group))
        revenue = float(group["revenue"].sum())
        aov = revenue / order_count if order_count else 0.0

        avg_shipping = None
        if "shipping_days" in group and group["shipping_days"].notna().any():
            avg_shipping = round(float(group["shipping_days"].mean()), 1)

        extra = extra_lookup.get((period.year, period.month), {})

        summaries.append(MonthlySummary(
            store_id=store_id,
            month=period.month,
            year=period.year,
            revenue=round(revenue, 2),
            orders=order_count,
            aov=round(aov, 2),
            returning_customer_rate=round(_returning_rate(group["customer"]), 2),
            units_sold=int(group["units"].sum()),
            conversion_rate=_optional_float(extra.get("conversion_rate")),
            avg_shipping_time=avg_shipping,
            abandoned_carts=_abandoned_carts(extra) if extra else None,
        ))

    log.info("Built %s monthly summaries for store %s", len(summaries), store_id)
    return summaries


def build_monthly_sales(
    orders: pd.DataFrame,
    columns: Optional[ColumnConfig] = None,
) -> List[MonthlySalesPoint]:
    """
    Total units per month with orders, dated to the first of the month.
    Months without orders are not filled in.
    """
    cols = _resolve_columns(orders, columns)
    df = _prepare_orders(orders, cols)

    units = df.groupby("period", sort=True)["units"].sum()
    return [
        MonthlySalesPoint(date=period.to_timestamp().date(), units=int(total))
        for period, total in units.items()
    ]


def summaries_by_period(summaries: Sequence[MonthlySummary]) -> Dict[tuple, MonthlySummary]:
    return {(s.store_id, s.year, s.month): s for s in summaries}
