# finlit/planner/errors.py
from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Input that cannot be planned for. The user can fix it and resubmit."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_detail(self) -> dict:
        return {"field": self.field, "message": self.message}


class UpstreamError(RuntimeError):
    """The narrative generator produced no structured output at all."""

    user_message = "Could not generate a savings plan right now. Please try again."
