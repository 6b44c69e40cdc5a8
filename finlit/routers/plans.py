# finlit/routers/plans.py
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from finlit.llm import narrator
from finlit.planner.assembler import prepare
from finlit.planner.errors import UpstreamError, ValidationError
from finlit.planner.schemas import EnrichedPlanRequest, PlanRequest, PlanResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["plans"])


@router.post("/plans/savings", response_model=PlanResponse)
def plans_savings(req: PlanRequest):
    try:
        return narrator.generate_savings_plan(req)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())
    except UpstreamError as e:
        logger.warning("Savings plan unavailable: %s", e)
        raise HTTPException(status_code=502, detail=UpstreamError.user_message)


@router.post("/plans/savings/prepare", response_model=EnrichedPlanRequest)
def plans_savings_prepare(req: PlanRequest):
    """Goal metrics and suggested allocations without calling the model."""
    try:
        return prepare(req)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())
