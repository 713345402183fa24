from __future__ import annotations

import math
import re
from typing import Any

# Leading numeric token; spreadsheet exports often trail units or notes.
_FLOAT_RX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_INT_RX = re.compile(r"^[+-]?\d+")


def _clean(value: Any) -> str | None:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    s = str(value).strip()
    if s == "":
        return None
    return s


def parse_percent(value: Any) -> float:
    """Return a percentage on the 0..100 scale.

    Values strictly between 0 and 1 are treated as fractions and scaled by
    100, so ``"0.45"`` and ``"45%"`` agree. A genuine ``"0.5%"`` is scaled
    too. Anything unparseable is 0.0.
    """

    s = _clean(value)
    if s is None:
        return 0.0
    s = s.replace("%", "").strip()
    m = _FLOAT_RX.match(s)
    if not m:
        return 0.0
    try:
        num = float(m.group(0))
    except (ValueError, OverflowError):
        return 0.0
    if math.isnan(num) or math.isinf(num):
        return 0.0
    if 0 < num < 1:
        return num * 100
    return num


def parse_number(value: Any) -> int:
    """Return an integer count with thousands separators removed; 0 when unparseable."""

    s = _clean(value)
    if s is None:
        return 0
    m = _INT_RX.match(s.replace(",", ""))
    if not m:
        return 0
    return int(m.group(0))
