from pathlib import Path
from typing import Optional, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

from storepulse.analytics.rules import MONTH_ABBREVIATIONS
from storepulse.analytics.seasonal_insights import strength_category
from storepulse.core.contracts import SeasonalPattern


def plot_seasonal_index(
    pattern: SeasonalPattern,
    out_path: Union[str, Path],
) -> Optional[Path]:
    """
    Bar chart of the 12 seasonal indices against the 1.0 baseline.

    Returns the written path, or None when the pattern has too little
    history to be meaningful.
    """
    if not pattern.has_enough_data:
        return None

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    colors = ["#2e7d32" if v >= 1 else "#c62828" for v in pattern.index]

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.bar(MONTH_ABBREVIATIONS, pattern.index, color=colors)
    ax.axhline(1.0, color="#555555", linestyle="--", linewidth=1)

    ax.set_title(
        f"Seasonality is {strength_category(pattern.strength)} "
        f"(strength {pattern.strength:.2f})"
    )
    ax.get_yaxis().set_major_formatter(
        FuncFormatter(lambda y, _: f"{(y - 1) * 100:+.0f}%")
    )
    ax.grid(axis="y", linestyle="--", alpha=0.4)

    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return out
