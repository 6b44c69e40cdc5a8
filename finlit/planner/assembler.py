# finlit/planner/assembler.py
"""
Bridge between the user's form input and the narrative generator.

prepare() validates the request and attaches locally computed goal metrics
so the generator can quote them. reconcile() takes whatever the generator
returned and makes every number in it agree with the request again: amounts
come from the request, metrics are recomputed, and gaps in the narrative are
filled with deterministic text. Both functions are pure.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Union

from pydantic import ValidationError as SchemaError

from .allocation import allocate_surplus, describe_time_to_goal, estimate_months_to_goal
from .errors import UpstreamError, ValidationError
from .formatting import format_inr
from .goal_math import (
    compute_completion_percentage,
    compute_goal_metrics,
    compute_monthly_surplus,
    compute_remaining_amount,
)
from .schemas import EnrichedGoal, EnrichedPlanRequest, GoalPlanEntry, PlanRequest, PlanResponse

logger = logging.getLogger(__name__)

DEFAULT_DISCLAIMER = (
    "This savings plan is AI-generated and for informational purposes only. "
    "It does not constitute financial advice. Consult a qualified financial "
    "advisor for personalized guidance."
)
UNNAMED_GOAL = "Unnamed goal"


def _alpha_suffix(idx: int) -> str:
    # 0 -> a, 25 -> z, 26 -> aa
    letters: List[str] = []
    while True:
        idx, rem = divmod(idx, 26)
        letters.append(chr(ord("a") + rem))
        if idx == 0:
            break
        idx -= 1
    return "".join(reversed(letters))


def goal_id_for(idx: int) -> str:
    return f"goal-{_alpha_suffix(idx)}"


def _field_path(loc: Sequence[Any]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _coerce_request(request: Union[PlanRequest, Mapping[str, Any]]) -> PlanRequest:
    if isinstance(request, PlanRequest):
        return request
    try:
        return PlanRequest.model_validate(request)
    except SchemaError as e:
        first = e.errors()[0]
        raise ValidationError(first.get("msg", "Invalid input."), field=_field_path(first.get("loc", ()))) from e


def _validate_request(request: PlanRequest) -> None:
    if not math.isfinite(request.monthlyIncome) or request.monthlyIncome <= 0:
        raise ValidationError("Monthly income must be a positive number.", field="monthlyIncome")
    if not math.isfinite(request.monthlyExpenses) or request.monthlyExpenses < 0:
        raise ValidationError("Monthly expenses cannot be negative.", field="monthlyExpenses")
    if not request.goals:
        raise ValidationError("Define at least one financial goal.", field="goals")

    for idx, goal in enumerate(request.goals):
        if not (goal.name or "").strip():
            raise ValidationError("Goal name is required.", field=f"goals[{idx}].name")
        if not math.isfinite(goal.targetAmount) or goal.targetAmount <= 0:
            raise ValidationError(
                "Target amount must be a positive number.", field=f"goals[{idx}].targetAmount"
            )
        if not math.isfinite(goal.currentAmount) or goal.currentAmount < 0:
            raise ValidationError(
                "Current amount saved cannot be negative.", field=f"goals[{idx}].currentAmount"
            )


def _enrich_goals(request: PlanRequest, monthly_surplus: float) -> List[EnrichedGoal]:
    metrics = [compute_goal_metrics(goal) for goal in request.goals]
    allocations = allocate_surplus(monthly_surplus, [m.remainingAmount for m in metrics])

    enriched: List[EnrichedGoal] = []
    for idx, (goal, m, allocation) in enumerate(zip(request.goals, metrics, allocations)):
        enriched.append(
            EnrichedGoal(
                **goal.model_dump(),
                goalId=goal_id_for(idx),
                completionPercentage=m.completionPercentage,
                remainingAmount=m.remainingAmount,
                suggestedMonthlyAllocation=allocation,
                estimatedMonths=estimate_months_to_goal(m.remainingAmount, allocation),
            )
        )
    return enriched


def prepare(request: Union[PlanRequest, Mapping[str, Any]]) -> EnrichedPlanRequest:
    req = _coerce_request(request)
    _validate_request(req)
    monthly_surplus = compute_monthly_surplus(req.monthlyIncome, req.monthlyExpenses)
    return EnrichedPlanRequest(
        monthlyIncome=req.monthlyIncome,
        monthlyExpenses=req.monthlyExpenses,
        monthlySurplus=monthly_surplus,
        goals=_enrich_goals(req, monthly_surplus),
    )


# ---------- reconciliation ----------

def _safe_float(val: Any) -> Optional[float]:
    if val is None or isinstance(val, bool):
        return None
    try:
        num = float(val)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def _text(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, (list, tuple)):
        # bullet lists come back as arrays of lines
        return "\n".join(line for line in (_text(item) for item in val) if line)
    return str(val).strip()


def _name_key(name: Any) -> str:
    return _text(name).casefold()


def _default_summary(request: PlanRequest, monthly_surplus: float) -> str:
    income = format_inr(request.monthlyIncome)
    expenses = format_inr(request.monthlyExpenses)
    if monthly_surplus > 0:
        return (
            f"Your monthly surplus is {format_inr(monthly_surplus)} "
            f"(income {income} minus expenses {expenses}). "
            "The plan below splits it across your goals."
        )
    if monthly_surplus == 0:
        return (
            f"Your monthly expenses of {expenses} use up your full income of {income}. "
            "Freeing up even a small surplus is the first step toward your goals."
        )
    return (
        f"Your monthly expenses of {expenses} exceed your income of {income} "
        f"by {format_inr(-monthly_surplus)}. Closing this gap comes before funding new goals."
    )


def _default_strategy(goal: Optional[EnrichedGoal], remaining: float) -> str:
    if goal is None:
        return "Review this goal's figures and set a monthly amount you can commit to."
    if remaining <= 0:
        return f"You have already reached the target for {goal.name}."
    if goal.suggestedMonthlyAllocation > 0:
        return (
            f"Set aside {format_inr(goal.suggestedMonthlyAllocation)} a month toward {goal.name}. "
            f"{format_inr(remaining)} remains to be saved."
        )
    return (
        f"There is no monthly surplus to put toward {goal.name} yet. "
        f"Reduce expenses to start saving; {format_inr(remaining)} remains to be saved."
    )


def _match_goals(raw_plans: List[Mapping[str, Any]], goals: List[EnrichedGoal]) -> List[Optional[int]]:
    """Index of the request goal each entry belongs to, by goalId first and then by name."""
    by_id = {g.goalId: idx for idx, g in enumerate(goals)}
    matches: List[Optional[int]] = [None] * len(raw_plans)
    claimed: Set[int] = set()

    for pos, raw in enumerate(raw_plans):
        idx = by_id.get(_text(raw.get("goalId")))
        if idx is not None and idx not in claimed:
            matches[pos] = idx
            claimed.add(idx)

    for pos, raw in enumerate(raw_plans):
        if matches[pos] is not None:
            continue
        key = _name_key(raw.get("name") or raw.get("goalName"))
        if not key:
            continue
        for idx, goal in enumerate(goals):
            if idx not in claimed and _name_key(goal.name) == key:
                matches[pos] = idx
                claimed.add(idx)
                break

    return matches


def _reconcile_entry(raw: Mapping[str, Any], goal: Optional[EnrichedGoal]) -> GoalPlanEntry:
    if goal is not None:
        goal_id: Optional[str] = goal.goalId
        name = goal.name
        target = goal.targetAmount
        current = goal.currentAmount
    else:
        # Not one of the submitted goals; the generator's amounts are all we have.
        goal_id = None
        name = _text(raw.get("name") or raw.get("goalName")) or UNNAMED_GOAL
        target = _safe_float(raw.get("targetAmount")) or 0.0
        current = _safe_float(raw.get("currentAmount")) or 0.0

    remaining = compute_remaining_amount(current, target)
    completion = compute_completion_percentage(current, target)

    strategy = _text(raw.get("savingsStrategy") or raw.get("savingsStrategyForGoal"))
    if not strategy:
        strategy = _default_strategy(goal, remaining)

    estimate: Optional[str] = _text(raw.get("estimatedTimeToAchieve")) or None
    if goal is not None:
        if remaining <= 0:
            estimate = describe_time_to_goal(0)
        elif estimate is None:
            estimate = describe_time_to_goal(goal.estimatedMonths)

    return GoalPlanEntry(
        goalId=goal_id,
        name=name,
        targetAmount=round(target, 2),
        currentAmount=round(current, 2),
        remainingAmount=remaining,
        completionPercentage=completion,
        savingsStrategy=strategy,
        estimatedTimeToAchieve=estimate,
    )


def reconcile(
    raw_response: Union[PlanResponse, Mapping[str, Any], None],
    original_request: Union[PlanRequest, Mapping[str, Any]],
) -> PlanResponse:
    if raw_response is None:
        raise UpstreamError("The narrative generator returned no savings plan.")
    if isinstance(raw_response, PlanResponse):
        data: Dict[str, Any] = raw_response.model_dump()
    elif isinstance(raw_response, Mapping):
        data = dict(raw_response)
    else:
        raise UpstreamError(f"Unexpected generator output of type {type(raw_response).__name__}.")

    request = _coerce_request(original_request)
    monthly_surplus = compute_monthly_surplus(request.monthlyIncome, request.monthlyExpenses)
    goals = _enrich_goals(request, monthly_surplus)

    raw_plans = data.get("goalPlans") or data.get("detailedGoalPlans") or []
    if not isinstance(raw_plans, list):
        raw_plans = []
    raw_plans = [p for p in raw_plans if isinstance(p, Mapping)]

    matches = _match_goals(raw_plans, goals)
    entries = [
        _reconcile_entry(raw, goals[idx] if idx is not None else None)
        for raw, idx in zip(raw_plans, matches)
    ]

    covered = {idx for idx in matches if idx is not None}
    missing = [goal for idx, goal in enumerate(goals) if idx not in covered]
    if missing:
        logger.info("Generator omitted %d of %d goals; filling them in", len(missing), len(goals))
    for goal in missing:
        entries.append(_reconcile_entry({}, goal))

    unmatched = sum(1 for idx in matches if idx is None)
    if unmatched:
        logger.debug("%d generated goal plans did not match a submitted goal", unmatched)

    summary = _text(data.get("overallSummary") or data.get("overallSavingsSummary"))
    disclaimer = _text(data.get("disclaimer"))
    if not disclaimer:
        logger.debug("Generator returned no disclaimer; using the default")

    return PlanResponse(
        overallSummary=summary or _default_summary(request, monthly_surplus),
        goalPlans=entries,
        generalAdvice=_text(data.get("generalAdvice")),
        disclaimer=disclaimer or DEFAULT_DISCLAIMER,
    )
