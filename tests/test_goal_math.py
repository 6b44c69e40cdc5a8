import pytest

from finlit.planner.goal_math import (
    compute_completion_percentage,
    compute_goal_metrics,
    compute_monthly_surplus,
    compute_remaining_amount,
)
from finlit.planner.schemas import Goal


@pytest.mark.parametrize(
    "current,target",
    [(0, 1000), (250, 1000), (1, 3), (2, 3), (999.99, 1000), (1000, 1000), (12500, 50000)],
)
def test_completion_within_bounds_matches_ratio(current, target):
    pct = compute_completion_percentage(current, target)
    assert 0 <= pct <= 100
    assert pct == round(current / target * 100, 1)


def test_completion_rounds_to_one_decimal():
    assert compute_completion_percentage(1, 3) == 33.3
    assert compute_completion_percentage(2, 3) == 66.7


@pytest.mark.parametrize("current,target", [(12000, 10000), (10001, 10000), (5e9, 1)])
def test_completion_caps_at_100_when_overfunded(current, target):
    assert compute_completion_percentage(current, target) == 100


def test_completion_zero_target():
    assert compute_completion_percentage(500, 0) == 100
    assert compute_completion_percentage(0, 0) == 0


def test_completion_negative_current_clamps_to_zero():
    assert compute_completion_percentage(-50, 1000) == 0


def test_completion_negative_target_does_not_raise():
    assert compute_completion_percentage(10, -100) == 100
    assert compute_completion_percentage(0, -100) == 0


@pytest.mark.parametrize(
    "current,target",
    [(12000, 10000), (0, 0), (500, 0), (-100, 1000), (10000, 10000), (0.004, 0.001)],
)
def test_remaining_never_negative(current, target):
    assert compute_remaining_amount(current, target) >= 0


def test_remaining_examples():
    assert compute_remaining_amount(12000, 10000) == 0
    assert compute_remaining_amount(12500, 50000) == 37500
    assert compute_remaining_amount(-100, 1000) == 1100
    assert compute_remaining_amount(1234.5, 10000) == 8765.5


def test_surplus_can_be_negative():
    assert compute_monthly_surplus(30000, 45000) == -15000
    assert compute_monthly_surplus(50000, 30000) == 20000
    assert compute_monthly_surplus(40000, 40000) == 0


def test_goal_metrics_wrapper():
    metrics = compute_goal_metrics(Goal(name="Laptop", targetAmount=80000, currentAmount=20000))
    assert metrics.completionPercentage == 25.0
    assert metrics.remainingAmount == 60000
