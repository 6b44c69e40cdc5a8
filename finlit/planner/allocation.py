# finlit/planner/allocation.py
from __future__ import annotations

import math
from typing import List, Optional, Sequence


def allocate_surplus(monthly_surplus: float, remaining_amounts: Sequence[float]) -> List[float]:
    """
    Split a positive monthly surplus equally across goals that still need money.

    A goal never receives more than it has left; what it cannot absorb is
    shared among the others. Goals are treated equally regardless of order.
    The allocations never sum to more than the surplus.
    """
    allocations = [0.0] * len(remaining_amounts)
    if monthly_surplus <= 0:
        return allocations

    open_idx = [i for i, r in enumerate(remaining_amounts) if r > 0]
    pool = float(monthly_surplus)
    while open_idx and pool > 1e-9:
        share = pool / len(open_idx)
        still_open: List[int] = []
        for i in open_idx:
            need = remaining_amounts[i] - allocations[i]
            given = min(share, need)
            allocations[i] += given
            pool -= given
            if need - given > 1e-9:
                still_open.append(i)
        if len(still_open) == len(open_idx):
            break
        open_idx = still_open

    # round down so the rounded total stays within the surplus
    return [math.floor(a * 100 + 1e-6) / 100 for a in allocations]


def estimate_months_to_goal(remaining_amount: float, monthly_allocation: float) -> Optional[int]:
    if remaining_amount <= 0:
        return 0
    if monthly_allocation <= 0:
        return None
    months = remaining_amount / monthly_allocation
    if not math.isfinite(months):
        return None
    return int(math.ceil(months))


def describe_time_to_goal(months: Optional[int]) -> str:
    if months is None:
        return "Not reachable at current surplus"
    if months == 0:
        return "Goal already achieved"
    if months == 1:
        return "Approx. 1 month"
    if months < 24:
        return f"Approx. {months} months"
    years = round(months / 12.0, 1)
    if float(years).is_integer():
        return f"Approx. {int(years)} years"
    return f"Approx. {years} years"
