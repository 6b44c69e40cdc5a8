# finlit/planner/formatting.py
from __future__ import annotations

from typing import Any, List, Optional


def _to_float(val: Any) -> Optional[float]:
    if val is None or isinstance(val, bool):
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: List[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(value: Any) -> str:
    """₹ with Indian digit grouping; paise only when non-zero (₹12,500 / ₹1,00,000.5)."""
    num = _to_float(value)
    if num is None:
        num = 0.0
    text = f"{abs(num):.2f}".rstrip("0").rstrip(".")
    int_part, _, frac_part = text.partition(".")
    grouped = _group_indian(int_part)
    if frac_part:
        grouped = f"{grouped}.{frac_part}"
    sign = "-" if num < 0 and text != "0" else ""
    return f"{sign}₹{grouped}"
