"""Header-to-column detection for loosely labelled newsletter sheets.

Headers are compared case-insensitively after ``strip()``. For every field the
first header containing any of its substrings wins, so an ambiguous sheet
(e.g. "Open Rate" and "Opens") always resolves to the left-most column.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..models import NOT_FOUND, ColumnIndices

logger = logging.getLogger(__name__)

# Ordered (field -> substrings) table; order is the detection order.
FIELD_MATCHERS: Dict[str, List[str]] = {
    "week": ["week"],
    "open_rate": ["open"],
    "click_rate": ["click"],
    "subscribers": ["subscrib", "subs", "audience", "list"],
}


def normalize_headers(headers: Iterable[object]) -> List[str]:
    return ["" if h is None else str(h).strip().lower() for h in headers]


def find_column(headers: Sequence[str], needles: Iterable[str]) -> int:
    """Return the index of the first header containing one of ``needles``."""
    keys = [str(n).lower() for n in needles if n]
    for idx, header in enumerate(headers):
        if any(key in header for key in keys):
            return idx
    return NOT_FOUND


def detect_fields(headers: Sequence[object], matchers: Optional[Mapping[str, Iterable[str]]] = None) -> ColumnIndices:
    """Map a header row to :class:`ColumnIndices`.

    ``matchers`` may override the substrings for some or all fields; fields it
    does not mention keep the defaults from :data:`FIELD_MATCHERS`.
    """

    table = dict(FIELD_MATCHERS)
    if matchers:
        table.update({k: list(v) for k, v in matchers.items() if k in FIELD_MATCHERS})

    normalized = normalize_headers(headers)
    found = {name: find_column(normalized, needles) for name, needles in table.items()}
    columns = ColumnIndices(**found)

    missing = columns.missing()
    if missing:
        logger.debug("No header matched for %s (headers=%s)", ", ".join(missing), normalized)
    return columns
