"""
Report assembly.

Pairs each monthly summary with its calendar predecessor and runs the
analytics engines over the pair. The engines stay independent of each
other; this module is the only place that combines their outputs.
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from storepulse.aggregation.monthly import summaries_by_period
from storepulse.analytics import (
    analyze_root_causes,
    decompose_seasonality,
    derive_seasonal_insights,
    generate_alerts,
)
from storepulse.core.contracts import (
    Alert,
    MetricDeltas,
    MonthlySalesPoint,
    MonthlySummary,
    RootCause,
    SeasonalInsights,
    SeasonalPattern,
)
from storepulse.reporting.formatters import fmt_currency

log = logging.getLogger("storepulse.reporting")


@dataclass(frozen=True)
class MonthlyReport:
    store_id: str
    month: int
    year: int
    summary: MonthlySummary
    root_causes: Tuple[RootCause, ...]
    deltas: Optional[MetricDeltas]
    alerts: Tuple[Alert, ...]
    seasonal_pattern: SeasonalPattern
    seasonal_insights: SeasonalInsights


def previous_period(month: int, year: int) -> Tuple[int, int]:
    """Calendar month before (month, year) as (month, year)."""
    prior = date(year, month, 1) - relativedelta(months=1)
    return prior.month, prior.year


# =====================================================
# ASSEMBLY
# =====================================================

def build_monthly_report(
    current: MonthlySummary,
    previous: Optional[MonthlySummary],
    sales: Optional[Sequence[MonthlySalesPoint]] = None,
    pattern: Optional[SeasonalPattern] = None,
) -> MonthlyReport:
    if pattern is None:
        pattern = decompose_seasonality(sales or [])

    causes = analyze_root_causes(current, previous)
    alerts = generate_alerts(current, previous)

    return MonthlyReport(
        store_id=current.store_id,
        month=current.month,
        year=current.year,
        summary=current,
        root_causes=causes.root_causes,
        deltas=causes.deltas,
        alerts=tuple(alerts),
        seasonal_pattern=pattern,
        seasonal_insights=derive_seasonal_insights(pattern),
    )


def build_store_reports(
    summaries: Sequence[MonthlySummary],
    sales: Optional[Sequence[MonthlySalesPoint]] = None,
) -> List[MonthlyReport]:
    """
    Build one report per summary, oldest first.

    A month whose calendar predecessor is missing is treated as a baseline
    month (no root causes, welcome alert).
    """
    pattern = decompose_seasonality(sales or [])
    index = summaries_by_period(summaries)

    reports = []
    for summary in sorted(summaries, key=lambda s: (s.store_id, s.year, s.month)):
        prev_month, prev_year = previous_period(summary.month, summary.year)
        previous = index.get((summary.store_id, prev_year, prev_month))

        if previous is None:
            log.info(
                "%s %s-%02d: baseline month", summary.store_id, summary.year, summary.month
            )

        report = build_monthly_report(summary, previous, pattern=pattern)
        log.info(
            "%s %s-%02d: %s revenue | %s root causes | %s alerts",
            summary.store_id, summary.year, summary.month, fmt_currency(summary.revenue),
            len(report.root_causes), len(report.alerts),
        )
        reports.append(report)

    return reports


# =====================================================
# SERIALISATION
# =====================================================

def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def report_to_dict(report: MonthlyReport) -> Dict[str, Any]:
    """JSON-ready representation of a report."""
    return _plain(dataclasses.asdict(report))
