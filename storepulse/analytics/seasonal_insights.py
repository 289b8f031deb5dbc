"""
Seasonal Insights

Ranks a seasonal index into best / worst months and turns the seasonality
strength into rule-based inventory and marketing recommendations.
"""

from typing import Any, Dict, List

from storepulse.analytics.rules import (
    MONTH_ABBREVIATIONS,
    MONTH_NAMES,
    STRENGTH_CAMPAIGN,
    STRENGTH_HIGH,
    STRENGTH_MEDIUM,
)
from storepulse.core.contracts import (
    MonthRank,
    SeasonalInsights,
    SeasonalPattern,
    SeasonalRecommendation,
)


def _percent_deviation(index: float) -> float:
    return round((index - 1) * 100, 1)


def strength_category(strength: float) -> str:
    if strength > STRENGTH_HIGH:
        return "High"
    if strength > STRENGTH_MEDIUM:
        return "Medium"
    return "Low"


_STRENGTH_DESCRIPTIONS = {
    "High": "Strong seasonal pattern",
    "Medium": "Moderate seasonal pattern",
    "Low": "Weak seasonal pattern",
}


def _build_recommendations(
    strength: float,
    top_months: List[MonthRank],
    bottom_months: List[MonthRank],
) -> List[SeasonalRecommendation]:
    recommendations = []

    if strength <= STRENGTH_MEDIUM:
        recommendations.append(SeasonalRecommendation(
            type="general",
            priority="low",
            title="Consistent year-round performance",
            description=(
                "This product shows stable demand throughout the year. "
                "Maintain consistent inventory and marketing."
            ),
        ))
        return recommendations

    best = top_months[0]
    worst = bottom_months[0]
    lead_month = MONTH_NAMES[(best.month_number - 1) % 12]

    recommendations.append(SeasonalRecommendation(
        type="inventory",
        priority="high",
        title=f"Stock {abs(best.change):.1f}% more for {best.month}",
        description=(
            f"{best.month} historically performs {best.change:.1f}% above average. "
            f"Increase inventory by late {lead_month}."
        ),
    ))

    recommendations.append(SeasonalRecommendation(
        type="marketing",
        priority="medium",
        title=f"Reduce ad spend in {worst.month}",
        description=(
            f"{worst.month} shows {abs(worst.change):.1f}% below average sales. "
            "Consider shifting budget to peak months."
        ),
    ))

    if strength > STRENGTH_CAMPAIGN:
        peak_names = ", ".join(m.month for m in top_months)
        recommendations.append(SeasonalRecommendation(
            type="promotion",
            priority="high",
            title="Launch pre-season campaigns",
            description=(
                f"Start marketing campaigns 2-3 weeks before {peak_names} "
                "to capture early demand."
            ),
        ))

    return recommendations


def derive_seasonal_insights(pattern: SeasonalPattern) -> SeasonalInsights:
    """
    Rank months by seasonal index and derive recommendations.

    Ties keep calendar order (the ranking sort is stable).
    """
    monthly = [
        MonthRank(
            month=MONTH_NAMES[i],
            month_number=i,
            index=value,
            change=_percent_deviation(value),
        )
        for i, value in enumerate(pattern.index)
    ]

    ranked = sorted(monthly, key=lambda m: m.index, reverse=True)
    top_months = ranked[:3]
    bottom_months = ranked[-3:][::-1]

    category = strength_category(pattern.strength)

    return SeasonalInsights(
        top_months=tuple(top_months),
        bottom_months=tuple(bottom_months),
        strength_category=category,
        strength_description=_STRENGTH_DESCRIPTIONS[category],
        recommendations=tuple(
            _build_recommendations(pattern.strength, top_months, bottom_months)
        ),
        monthly_data=tuple(monthly),
    )


def format_seasonal_display(pattern: SeasonalPattern) -> Dict[str, Any]:
    """Dashboard-friendly view of a seasonal pattern."""
    monthly_performance = []
    for i, value in enumerate(pattern.index):
        if value >= 1.05:
            trend = "up"
        elif value <= 0.95:
            trend = "down"
        else:
            trend = "neutral"

        monthly_performance.append({
            "month": MONTH_ABBREVIATIONS[i],
            "full_month": MONTH_NAMES[i],
            "index": value,
            "percentage": _percent_deviation(value),
            "trend": trend,
        })

    return {
        "strength": pattern.strength,
        "strength_label": strength_category(pattern.strength),
        "monthly_performance": monthly_performance,
        "has_enough_data": pattern.has_enough_data,
    }
