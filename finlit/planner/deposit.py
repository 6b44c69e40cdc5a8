# finlit/planner/deposit.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict

from .errors import ValidationError

MIN_PRINCIPAL = 1000.0
MIN_MONTHS = 1
MAX_MONTHS = 120
MIN_RATE_PCT = 1.0
MAX_RATE_PCT = 20.0


@dataclass
class FixedDepositResult:
    principal: float
    interest_earned: float
    maturity_amount: float
    duration_months: int
    annual_rate_pct: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "principal": self.principal,
            "interestEarned": self.interest_earned,
            "maturityAmount": self.maturity_amount,
            "durationMonths": self.duration_months,
            "annualRatePct": self.annual_rate_pct,
        }


def _validate(principal: float, duration_months: Any, annual_rate_pct: float) -> None:
    if not math.isfinite(principal) or principal < MIN_PRINCIPAL:
        raise ValidationError("Minimum principal amount is ₹1,000.", field="principalAmount")
    if (
        isinstance(duration_months, bool)
        or not math.isfinite(duration_months)
        or int(duration_months) != duration_months
    ):
        raise ValidationError("Duration must be a whole number of months.", field="durationInMonths")
    if not MIN_MONTHS <= duration_months <= MAX_MONTHS:
        raise ValidationError(
            f"Duration must be between {MIN_MONTHS} and {MAX_MONTHS} months.", field="durationInMonths"
        )
    if not math.isfinite(annual_rate_pct) or not MIN_RATE_PCT <= annual_rate_pct <= MAX_RATE_PCT:
        raise ValidationError(
            f"Interest rate must be between {MIN_RATE_PCT:g}% and {MAX_RATE_PCT:g}%.",
            field="annualInterestRate",
        )


def compute_fd_returns(principal: float, duration_months: int, annual_rate_pct: float) -> FixedDepositResult:
    """
    Fixed deposit maturity with annual compounding:
        maturity = P * (1 + r) ** (months / 12)
    Banks that compound quarterly will quote slightly higher figures.
    """
    _validate(principal, duration_months, annual_rate_pct)
    rate = annual_rate_pct / 100.0
    years = duration_months / 12.0
    maturity = principal * (1.0 + rate) ** years
    return FixedDepositResult(
        principal=round(principal, 2),
        interest_earned=round(maturity - principal, 2),
        maturity_amount=round(maturity, 2),
        duration_months=int(duration_months),
        annual_rate_pct=annual_rate_pct,
    )
