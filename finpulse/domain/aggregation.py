"""Category and calendar-month aggregation of financial records"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from finpulse.domain.coercion import (
    CATEGORY_KEYS,
    UNCATEGORIZED,
    ZERO,
    coerce_amount,
    resolve_amount,
    resolve_field,
)
from finpulse.domain.models import (
    EXPENDITURE,
    REVENUE,
    CategoryTotal,
    MonthlyBucket,
    Transaction,
)
from finpulse.utils.date_utils import month_label, parse_month_label

DEFAULT_TOP_N = 8


def aggregate_by_category(
    records: Iterable[Any],
    keys: Sequence[str] = CATEGORY_KEYS,
) -> Dict[str, Decimal]:
    """
    Sum amounts per category label.

    Labels are resolved from `keys` in order, falling back to "Uncategorized",
    and compared by exact string equality ("Food" and "food" are distinct).
    Amounts go through coerce_amount, so the group totals always add up to the
    sum of the coerced inputs.
    """
    totals: Dict[str, Decimal] = {}
    for record in records:
        label = str(resolve_field(record, keys, UNCATEGORIZED))
        amount = resolve_amount(record)
        totals[label] = totals.get(label, ZERO) + amount
    return totals


def rank_categories(
    totals: Dict[str, Decimal],
    limit: Optional[int] = DEFAULT_TOP_N,
) -> List[CategoryTotal]:
    """
    Order categories by descending absolute total and keep the first `limit`.

    sorted() is stable, so equal magnitudes keep their encounter order.
    """
    ranked = sorted(totals.items(), key=lambda item: abs(item[1]), reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [CategoryTotal(name=name, total=total) for name, total in ranked]


def category_breakdown(
    transactions: Iterable[Transaction],
    txn_type: Optional[str] = None,
) -> List[CategoryTotal]:
    """All categories ranked by total, optionally for one transaction type only"""
    if txn_type is not None:
        transactions = [t for t in transactions if t.type == txn_type]
    return rank_categories(aggregate_by_category(transactions), limit=None)


def monthly_trends(transactions: Iterable[Transaction]) -> List[MonthlyBucket]:
    """
    Bucket transactions by calendar month with separate revenue/expense sums.

    Buckets are returned in chronological order, reconstructed from the label
    ("Dec 2023" before "Jan 2024"), not in lexical or first-seen order.
    """
    buckets: Dict[str, MonthlyBucket] = {}
    for txn in transactions:
        label = month_label(txn.date)
        bucket = buckets.get(label)
        if bucket is None:
            bucket = buckets[label] = MonthlyBucket(month=label)

        amount = coerce_amount(txn.amount)
        if txn.type == REVENUE:
            bucket.revenue += amount
        elif txn.type == EXPENDITURE:
            bucket.expenses += amount

    return sorted(buckets.values(), key=lambda b: parse_month_label(b.month))
