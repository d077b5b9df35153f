"""Market value adjustment curves and the surrender-value chart."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from matplotlib import rc_context
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from illustration.core.defaults import MVA_BASE_RATE, MVA_RATE_SHOCK
from illustration.core.formatting import parse_money

logger = logging.getLogger(__name__)

CHART_WIDTH_PX = 750
CHART_HEIGHT_PX = 400
CHART_DPI = 100

SERIES_STYLE = (
    ("Decreased", "#e74c3c"),
    ("Base", "#3498db"),
    ("Increased", "#27ae60"),
)


@dataclass(frozen=True)
class MvaCurves:
    years: List[int]
    base: List[float]
    decreased: List[float]
    increased: List[float]


def mva_factors(
    base_rate: float,
    shock: float,
    term_1: int,
    term: int = 10,
) -> Tuple[List[float], List[float]]:
    """(decreased, increased) adjustment factors for years ``0 .. term``.

    The exponent is the number of years left in the first term, so both
    factors collapse to 1 from year ``term_1`` onwards.
    """
    exponents = [max(term_1 - i, 0) for i in range(term + 1)]
    decreased = [((1 + base_rate) / (1 + base_rate - shock)) ** e for e in exponents]
    increased = [((1 + base_rate) / (1 + base_rate + shock)) ** e for e in exponents]
    return decreased, increased


def mva_curves(
    surrender_values: Sequence[Union[str, float]],
    term_1: int,
    term: int = 10,
    base_rate: float = MVA_BASE_RATE,
    shock: float = MVA_RATE_SHOCK,
) -> MvaCurves:
    base = [parse_money(v) for v in surrender_values[: term + 1]]
    decreased_factors, increased_factors = mva_factors(base_rate, shock, term_1, term)
    return MvaCurves(
        years=list(range(len(base))),
        base=base,
        decreased=[v * f for v, f in zip(base, decreased_factors)],
        increased=[v * f for v, f in zip(base, increased_factors)],
    )


def render_surrender_value_chart(
    surrender_values: Sequence[Union[str, float]],
    term_1: int,
    term: int = 10,
) -> str:
    """SVG line chart of the base, decreased and increased surrender values."""
    curves = mva_curves(surrender_values, term_1, term)

    # no pyplot: the figure is never registered with global state
    fig = Figure(figsize=(CHART_WIDTH_PX / CHART_DPI, CHART_HEIGHT_PX / CHART_DPI), dpi=CHART_DPI)
    ax = fig.add_subplot()
    for (label, color), values in zip(
        SERIES_STYLE, (curves.decreased, curves.base, curves.increased)
    ):
        ax.plot(curves.years, values, color=color, linewidth=2, marker="o", markersize=4, label=label)

    ax.set_title("MVA", fontsize=16)
    ax.set_xlabel("Year")
    ax.set_ylabel("Surrender value")
    ax.set_xticks(list(range(term + 1)))
    ax.set_xlim(0, term)
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _pos: f"{v:,.2f}"))
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    if curves.base:
        ax.legend(loc="upper right", frameon=False)
    fig.tight_layout()

    buffer = io.StringIO()
    # keep labels as <text> elements instead of glyph paths
    with rc_context({"svg.fonttype": "none"}):
        fig.savefig(buffer, format="svg")
    logger.debug("Rendered MVA chart years=%d term_1=%d", len(curves.years), term_1)
    return buffer.getvalue()
