from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from finlit.planner.parsers import coerce_amount


class _AmountModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    @field_validator("*", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any):
        return coerce_amount(v)


class SurplusRequest(_AmountModel):
    monthlyIncome: float
    monthlyExpenses: float


class SurplusResponse(BaseModel):
    monthlySurplus: float
    hasDeficit: bool


class GoalProgressRequest(_AmountModel):
    targetAmount: float
    currentAmount: float = 0.0


class FixedDepositRequest(_AmountModel):
    principalAmount: float
    durationInMonths: int
    annualInterestRate: float


class FixedDepositResponse(BaseModel):
    principal: float
    interestEarned: float
    maturityAmount: float
    durationMonths: int
    annualRatePct: float
