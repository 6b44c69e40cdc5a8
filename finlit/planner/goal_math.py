# finlit/planner/goal_math.py
"""
Deterministic goal arithmetic.

Every number shown next to a goal (completion %, remaining amount) and the
monthly surplus comes from here, never from the narrative generator.
"""
from __future__ import annotations

from typing import Any

from .schemas import GoalMetrics


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def compute_completion_percentage(current_amount: float, target_amount: float) -> float:
    """
    Share of the target already saved, 0-100, one decimal place.

    A zero (or negative) target cannot be divided by; such a goal counts as
    complete once anything has been saved toward it.
    """
    current = float(current_amount)
    target = float(target_amount)
    if target <= 0:
        return 100.0 if current > 0 else 0.0
    return round(_clamp(current / target * 100.0, 0.0, 100.0), 1)


def compute_remaining_amount(current_amount: float, target_amount: float) -> float:
    return round(max(0.0, float(target_amount) - float(current_amount)), 2)


def compute_monthly_surplus(monthly_income: float, monthly_expenses: float) -> float:
    # negative is a deficit, not an error
    return float(monthly_income) - float(monthly_expenses)


def compute_goal_metrics(goal: Any) -> GoalMetrics:
    return GoalMetrics(
        completionPercentage=compute_completion_percentage(goal.currentAmount, goal.targetAmount),
        remainingAmount=compute_remaining_amount(goal.currentAmount, goal.targetAmount),
    )
