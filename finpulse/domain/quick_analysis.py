"""Quick analysis of uploaded tables with no fixed schema"""

from collections.abc import Mapping
from typing import Any, Iterable

from finpulse.domain.aggregation import DEFAULT_TOP_N, aggregate_by_category, rank_categories
from finpulse.domain.coercion import ZERO, resolve_amount
from finpulse.domain.models import QuickAnalysis


def quick_analysis(rows: Iterable[Any], top_n: int = DEFAULT_TOP_N) -> QuickAnalysis:
    """
    Summarize arbitrary uploaded rows into inflow/outflow/net and top categories.

    Steps:
    - Amount from "amount" or "Amount", coerced; anything unusable counts as 0
    - Non-negative amounts are inflow, negative amounts are outflow (absolute value)
    - Signed amounts grouped by category, ranked by absolute total, top `top_n` kept

    Best-effort: malformed rows never raise. A row that is not a mapping at all
    is treated as an empty row.
    """
    normalized = [row if isinstance(row, Mapping) else {} for row in rows or ()]

    inflow = ZERO
    outflow = ZERO
    for row in normalized:
        amount = resolve_amount(row)
        if amount >= 0:
            inflow += amount
        else:
            outflow += abs(amount)

    top_categories = rank_categories(aggregate_by_category(normalized), limit=top_n)

    return QuickAnalysis(
        inflow=inflow,
        outflow=outflow,
        net=inflow - outflow,
        top_categories=top_categories,
    )
