from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from openai import OpenAI

from finlit.planner.assembler import prepare, reconcile
from finlit.planner.schemas import EnrichedPlanRequest, PlanRequest, PlanResponse

logger = logging.getLogger(__name__)

PROMPT_VERSION = "savings-plan-v1"
DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_TEMPERATURE = 0.3
MAX_TEMPERATURE = 2.0

Narrator = Callable[[EnrichedPlanRequest], Optional[Dict[str, Any]]]

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)


def _planner_settings() -> Tuple[str, float]:
    """Model and temperature for plan generation, read from the environment."""
    model = (os.getenv("LLM_MODEL_PLANNER") or "").strip() or DEFAULT_MODEL
    raw = (os.getenv("LLM_TEMPERATURE_PLANNER") or "").strip()
    if not raw:
        return model, DEFAULT_TEMPERATURE
    try:
        temperature = float(raw)
    except ValueError:
        temperature = -1.0
    if not 0.0 <= temperature <= MAX_TEMPERATURE:
        logger.warning("Ignoring LLM_TEMPERATURE_PLANNER=%r; using %s", raw, DEFAULT_TEMPERATURE)
        return model, DEFAULT_TEMPERATURE
    return model, temperature


def _system_prompt() -> str:
    return (
        "You are an AI Financial Planner writing a personalized savings plan. "
        "All monetary values are in Indian Rupees (INR).\n"
        "Rules:\n"
        "- Do NOT perform calculations. Every goal already carries completionPercentage, "
        "remainingAmount, suggestedMonthlyAllocation and estimatedMonths; copy them verbatim.\n"
        "- monthlySurplus is income minus expenses and may be negative. If it is not positive, "
        "explain how to prioritise and cut expenses instead of allocating savings.\n"
        "- Return one goalPlans entry per goal, keeping its goalId and name unchanged.\n"
        "- savingsStrategy: 2-3 actionable bullet points for that goal, mentioning the "
        "suggested monthly allocation when it is above zero.\n"
        "- estimatedTimeToAchieve: a short phrase such as \"Approx. 8 months\" or "
        "\"Goal already achieved\", based on estimatedMonths.\n"
        "- generalAdvice: 2-3 bullet points on budgeting (e.g. the 50/30/20 rule) and general "
        "avenues for leftover surplus (SIPs in mutual funds, fixed deposits, PPF). "
        "Do not recommend specific products.\n"
        "- Output must be valid JSON matching the schema below ONLY. No markdown fences, "
        "commentary, or extra keys.\n"
        "\n"
        "Schema:\n"
        "{\n"
        '  "overallSummary": "string",\n'
        '  "goalPlans": [{"goalId": "string", "name": "string", "targetAmount": number, '
        '"currentAmount": number, "remainingAmount": number, "completionPercentage": number, '
        '"savingsStrategy": "string", "estimatedTimeToAchieve": "string"}],\n'
        '  "generalAdvice": "string",\n'
        '  "disclaimer": "string"\n'
        "}\n"
    )


def _user_prompt(enriched: EnrichedPlanRequest) -> str:
    payload = json.dumps(enriched.model_dump(), ensure_ascii=True, separators=(",", ":"))
    return (
        "Context: locale=India, currency=INR.\n"
        "Financial profile JSON:\n"
        f"{payload}\n"
        "Return the savings plan JSON only."
    )


def _call_openai(system: str, user: str, model: str, temperature: float) -> str:
    """Reply text from the model, or "" when no key is configured or both APIs fail."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        logger.warning("OPENAI_API_KEY is not set; skipping savings plan generation")
        return ""
    client = OpenAI(api_key=api_key)

    messages = [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]
    try:
        resp = client.responses.create(model=model, input=messages, temperature=temperature)
        return resp.output_text or ""
    except Exception as e:
        logger.info("Responses API call failed (%s); retrying with chat completions", e)
    try:
        resp = client.chat.completions.create(model=model, messages=messages, temperature=temperature)
    except Exception:
        logger.warning("Savings plan generation failed", exc_info=True)
        return ""
    if not resp.choices:
        return ""
    return resp.choices[0].message.content or ""


def _load_plan_json(raw: str) -> Optional[Dict[str, Any]]:
    """
    Pull the plan object out of a model reply. Tolerates a ```json fence and
    prose before the object; anything that is not a JSON object is None.
    """
    text = (raw or "").strip()
    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1)
    start = text.find("{")
    if start < 0:
        return None
    try:
        data, _ = json.JSONDecoder().raw_decode(text, start)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def generate_plan_narrative(enriched: EnrichedPlanRequest) -> Optional[Dict[str, Any]]:
    """
    Ask the LLM for the narrative savings plan. Returns the raw JSON object, or
    None when nothing usable came back after one repair attempt. Numbers in
    the result are advisory; callers run it through reconcile().
    """
    model, temperature = _planner_settings()

    system = _system_prompt()
    user = _user_prompt(enriched)

    raw = _call_openai(system, user, model, temperature)
    data = _load_plan_json(raw)
    if data is None and raw:
        fix_prompt = (
            "The previous response was not valid JSON. "
            "Return ONLY the savings plan JSON object with no extra text."
        )
        raw = _call_openai(system, f"{user}\n\n{fix_prompt}\n\nPrevious response:\n{raw}", model, temperature)
        data = _load_plan_json(raw)

    if data is None:
        logger.warning("No structured savings plan from model=%s prompt=%s", model, PROMPT_VERSION)
    return data


def generate_savings_plan(
    request: Union[PlanRequest, Mapping[str, Any]],
    narrate: Optional[Narrator] = None,
) -> PlanResponse:
    enriched = prepare(request)
    raw = (narrate or generate_plan_narrative)(enriched)
    return reconcile(raw, request)
