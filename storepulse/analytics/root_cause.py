"""
Root-Cause Analysis

Compares two adjacent monthly summaries and explains, in plain English,
which metrics moved and how much that matters. Deterministic: the result
depends only on the two summaries.
"""

import logging
from typing import List, Optional

from storepulse.analytics.rules import (
    EXPLANATION_TEMPLATES,
    IMPACT_TIERS,
    INCLUSION_THRESHOLDS,
    MAX_ROOT_CAUSES,
    METRIC_WEIGHTS,
    OPTIONAL_METRICS,
)
from storepulse.core.contracts import (
    Direction,
    Impact,
    MetricDeltas,
    MetricKind,
    MonthlySummary,
    RootCause,
    RootCauseResult,
)

log = logging.getLogger("storepulse.root_cause")


# =====================================================
# HELPERS
# =====================================================

def percent_change(current: float, previous: float) -> float:
    """Relative change in percent; 0 when there is no previous base."""
    if not previous:
        return 0.0
    return (current - previous) / abs(previous) * 100


def classify_impact(change_percent: float, weight: float) -> Impact:
    weighted = abs(change_percent) * weight
    for minimum, impact in IMPACT_TIERS:
        if weighted >= minimum:
            return impact
    return Impact.LOW


def explain(metric: MetricKind, direction: Direction, change_percent: float) -> str:
    template = EXPLANATION_TEMPLATES[(metric, direction)]
    return template.format(p=f"{abs(change_percent):.1f}")


def _optional_delta(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    if current is None or previous is None:
        return None
    return current - previous


def calculate_deltas(current: MonthlySummary, previous: MonthlySummary) -> MetricDeltas:
    return MetricDeltas(
        revenue=current.revenue - previous.revenue,
        orders=current.orders - previous.orders,
        aov=current.aov - previous.aov,
        returning_customer_rate=(
            current.returning_customer_rate - previous.returning_customer_rate
        ),
        conversion_rate=_optional_delta(current.conversion_rate, previous.conversion_rate),
        avg_shipping_time=_optional_delta(current.avg_shipping_time, previous.avg_shipping_time),
    )


def _evaluate_metric(
    metric: MetricKind,
    current: MonthlySummary,
    previous: MonthlySummary,
) -> Optional[RootCause]:
    now = current.value_of(metric)
    before = previous.value_of(metric)

    if metric in OPTIONAL_METRICS and (now is None or before is None):
        return None

    change_percent = percent_change(now, before)
    if abs(change_percent) < INCLUSION_THRESHOLDS[metric]:
        return None

    change = now - before
    direction = Direction.of(change)

    return RootCause(
        metric=metric.label,
        change=change,
        change_percent=change_percent,
        impact=classify_impact(change_percent, METRIC_WEIGHTS[metric]),
        explanation=explain(metric, direction, change_percent),
        direction=direction,
    )


# =====================================================
# PUBLIC API
# =====================================================

def analyze_root_causes(
    current: MonthlySummary,
    previous: Optional[MonthlySummary],
) -> RootCauseResult:
    """
    Rank the metrics that explain a month-over-month change.

    Returns an empty result (no causes, no deltas) for the first tracked
    period. At most five causes are returned, highest impact first, ties
    broken by the size of the percent change.
    """
    if previous is None:
        log.debug(
            "No previous period for store %s %s-%02d",
            current.store_id, current.year, current.month,
        )
        return RootCauseResult(root_causes=(), deltas=None)

    candidates: List[RootCause] = []
    for metric in MetricKind:
        cause = _evaluate_metric(metric, current, previous)
        if cause is not None:
            candidates.append(cause)

    candidates.sort(key=lambda c: (-c.impact.rank, -abs(c.change_percent)))

    if len(candidates) > MAX_ROOT_CAUSES:
        log.debug("Dropping %s lower-ranked root causes", len(candidates) - MAX_ROOT_CAUSES)

    return RootCauseResult(
        root_causes=tuple(candidates[:MAX_ROOT_CAUSES]),
        deltas=calculate_deltas(current, previous),
    )
