# =============================================================================
# lib/pagination.py - Query Processor
# =============================================================================
# Pure filter -> sort -> paginate pipeline over a list of applications.
#
# Nothing here mutates its input: every step returns a new list, so the
# same records and parameters always yield the same page.
#
# Usage:
#   from lib.pagination import paginate
#   page = paginate(store.find_all(), ApplicationsQuery(page=2, page_size=5))
# =============================================================================

from __future__ import annotations

import math
import unicodedata
from enum import Enum
from typing import Sequence

from core.models.application import (
    Application,
    ApplicationsPage,
    ApplicationsQuery,
    SortBy,
    SortOrder,
)


# =============================================================================
# Collation
# =============================================================================

# Primary weight bands, lowest first: whitespace, punctuation and symbols,
# digits, then letters and everything else.
_WHITESPACE, _SYMBOL, _DIGIT, _LETTER = range(4)

# ASCII punctuation and symbols in Unicode root collation order.
_ASCII_SYMBOL_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"


def _primary_weight(ch: str) -> tuple[int, int, str]:
    rank = _ASCII_SYMBOL_ORDER.find(ch)
    if rank >= 0:
        return (_SYMBOL, rank, ch)

    category = unicodedata.category(ch)
    if ch.isspace() or category.startswith("Z"):
        return (_WHITESPACE, 0, ch)
    if category[0] in "PS":
        return (_SYMBOL, len(_ASCII_SYMBOL_ORDER), ch)
    if category.startswith("N"):
        return (_DIGIT, 0, ch)
    return (_LETTER, 0, ch)


def collation_key(value: str) -> tuple:
    """
    Build a locale-aware sort key for a string.

    Compares in three levels, the way a Unicode collator does:
    1. base characters, ignoring accents and case ("resume" == "Résumé");
       whitespace, punctuation and symbols sort before digits, digits
       before letters ("~beta" < "1st" < "alpha")
    2. accents ("resume" < "résumé")
    3. case, lowercase first ("apple" < "Apple")

    Example:
        sorted(["beta", "Alpha", "alpha"], key=collation_key)
        # ["alpha", "Alpha", "beta"]
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    primary = tuple(_primary_weight(ch) for ch in base.casefold())
    return (primary, decomposed.casefold(), value.swapcase())


def _field_value(record: Application, field: SortBy) -> str:
    value = getattr(record, field.value)
    return value.value if isinstance(value, Enum) else value


# =============================================================================
# Pipeline Steps
# =============================================================================

def filter_records(
    records: Sequence[Application],
    filter_by_name: str | None = None,
    filter_by_status: str | None = None,
) -> list[Application]:
    """
    Apply the name and status filters.

    Empty or missing filters are skipped.

    Args:
        records: Records to filter
        filter_by_name: Case-insensitive substring of name
        filter_by_status: Case-insensitive exact status

    Returns:
        New list with matching records in their original order
    """
    filtered = list(records)

    if filter_by_name:
        needle = filter_by_name.casefold()
        filtered = [r for r in filtered if needle in r.name.casefold()]

    if filter_by_status:
        wanted = filter_by_status.casefold()
        filtered = [r for r in filtered if r.status.value.casefold() == wanted]

    return filtered


def sort_records(
    records: Sequence[Application],
    sort_by: SortBy = SortBy.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Application]:
    """
    Sort records by a field using locale-aware collation.

    Ties keep their input order in both directions (sorted() is stable,
    including with reverse=True).
    """
    return sorted(
        records,
        key=lambda record: collation_key(_field_value(record, sort_by)),
        reverse=sort_order == SortOrder.DESC,
    )


def count_pages(total_records: int, page_size: int) -> int:
    """
    Number of pages needed for total_records.

    page_size is validated >= 1 upstream.
    """
    if total_records == 0:
        return 0
    return math.ceil(total_records / page_size)


# =============================================================================
# Main Entry Point
# =============================================================================

def paginate(
    records: Sequence[Application],
    params: ApplicationsQuery | None = None,
) -> ApplicationsPage:
    """
    Filter, sort and slice records into one page.

    Out-of-range pages return an empty record list, not an error.

    Args:
        records: The full record set (order irrelevant)
        params: Query parameters; defaults to page 1, 10 per page, name asc

    Returns:
        ApplicationsPage with count (filtered total), records, total_pages,
        current_page, next_page and prev_page
    """
    params = params or ApplicationsQuery()

    filtered = filter_records(records, params.filter_by_name, params.filter_by_status)
    ordered = sort_records(filtered, params.sort_by, params.sort_order)

    total_records = len(ordered)
    total_pages = count_pages(total_records, params.page_size)
    start = (params.page - 1) * params.page_size

    return ApplicationsPage(
        count=total_records,
        records=ordered[start:start + params.page_size],
        total_pages=total_pages,
        current_page=params.page,
        next_page=params.page + 1 if params.page < total_pages else None,
        prev_page=params.page - 1 if params.page > 1 else None,
    )
