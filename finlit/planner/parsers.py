# finlit/planner/parsers.py
from __future__ import annotations

import math
import re
from typing import Any, Optional


_STRIP_RE = re.compile(r"[,\s_]")
_CURRENCY_RE = re.compile(r"₹|\brs\.?|\binr\b|/-", re.IGNORECASE)
_SUFFIX_RE = re.compile(r"^(-?[0-9]*\.?[0-9]+)(k|l|lakh|cr|crore)$")

_MULTIPLIERS = {
    "k": 1000.0,
    "l": 100000.0,
    "lakh": 100000.0,
    "cr": 10000000.0,
    "crore": 10000000.0,
}


def _finite(x: float) -> Optional[float]:
    return x if math.isfinite(x) else None


def parse_amount(value: Any) -> Optional[float]:
    """
    Lenient INR amount parser for form input.
    Accepts:
      - 50000, 50000.5, "50000"
      - "50,000", "5,00,000", "₹ 5,00,000", "Rs. 12,500/-"
      - "25k", "4.5L", "12 lakhs", "1 Cr"
    Returns float rupees, or None when the value is blank, not a number, or
    not finite ("nan", "inf").
    Booleans are rejected even though they are ints.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _finite(float(value))

    s = str(value).strip()
    if not s:
        return None

    s = _CURRENCY_RE.sub("", s).lower()
    s = _STRIP_RE.sub("", s)
    s = s.replace("lakhs", "lakh").replace("lacs", "lakh").replace("lac", "lakh")
    s = s.replace("crores", "crore")
    if not s:
        return None

    m = _SUFFIX_RE.match(s)
    if m:
        return _finite(float(m.group(1)) * _MULTIPLIERS[m.group(2)])

    try:
        return _finite(float(s))
    except ValueError:
        return None


def coerce_amount(value: Any) -> Any:
    """pydantic before-validator: parse INR strings, leave everything else for pydantic to judge."""
    if isinstance(value, str):
        parsed = parse_amount(value)
        return value if parsed is None else parsed
    return value
