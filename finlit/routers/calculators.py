# finlit/routers/calculators.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from models import (
    FixedDepositRequest,
    FixedDepositResponse,
    GoalProgressRequest,
    SurplusRequest,
    SurplusResponse,
)
from finlit.planner.deposit import compute_fd_returns
from finlit.planner.errors import ValidationError
from finlit.planner.goal_math import (
    compute_completion_percentage,
    compute_monthly_surplus,
    compute_remaining_amount,
)
from finlit.planner.schemas import GoalMetrics

router = APIRouter(prefix="/calculators", tags=["calculators"])


@router.post("/surplus", response_model=SurplusResponse)
def calculators_surplus(req: SurplusRequest):
    surplus = compute_monthly_surplus(req.monthlyIncome, req.monthlyExpenses)
    return SurplusResponse(monthlySurplus=surplus, hasDeficit=surplus < 0)


@router.post("/goal-progress", response_model=GoalMetrics)
def calculators_goal_progress(req: GoalProgressRequest):
    return GoalMetrics(
        completionPercentage=compute_completion_percentage(req.currentAmount, req.targetAmount),
        remainingAmount=compute_remaining_amount(req.currentAmount, req.targetAmount),
    )


@router.post("/fixed-deposit", response_model=FixedDepositResponse)
def calculators_fixed_deposit(req: FixedDepositRequest):
    try:
        result = compute_fd_returns(req.principalAmount, req.durationInMonths, req.annualInterestRate)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())
    return result.to_dict()
