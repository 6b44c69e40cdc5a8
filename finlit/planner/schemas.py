# finlit/planner/schemas.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .parsers import coerce_amount


# Range checks (positive target, non-negative current, ...) live in
# assembler.prepare so callers get one error type with a field path.
class Goal(BaseModel):
    name: str
    targetAmount: float
    currentAmount: float = 0.0
    targetDate: Optional[str] = None

    @field_validator("targetAmount", "currentAmount", mode="before")
    @classmethod
    def _parse_amount(cls, v):
        if v is None:
            return 0.0
        return coerce_amount(v)


class PlanRequest(BaseModel):
    monthlyIncome: float
    monthlyExpenses: float
    goals: List[Goal]

    @field_validator("monthlyIncome", "monthlyExpenses", mode="before")
    @classmethod
    def _parse_amount(cls, v):
        return coerce_amount(v)


class GoalMetrics(BaseModel):
    completionPercentage: float
    remainingAmount: float


class EnrichedGoal(Goal):
    goalId: str
    completionPercentage: float
    remainingAmount: float
    suggestedMonthlyAllocation: float
    estimatedMonths: Optional[int] = None


class EnrichedPlanRequest(BaseModel):
    monthlyIncome: float
    monthlyExpenses: float
    monthlySurplus: float
    goals: List[EnrichedGoal]


class GoalPlanEntry(BaseModel):
    goalId: Optional[str] = None
    name: str
    targetAmount: float
    currentAmount: float
    remainingAmount: float
    completionPercentage: float
    savingsStrategy: str
    estimatedTimeToAchieve: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class PlanResponse(BaseModel):
    overallSummary: str
    goalPlans: List[GoalPlanEntry]
    generalAdvice: str = ""
    disclaimer: str

    model_config = ConfigDict(extra="forbid")
