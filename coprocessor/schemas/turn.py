"""
Turn Schemas - Data models for the chat turn lifecycle.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .compliance import ComplianceResponse


class TurnStatus(str, Enum):
    """Lifecycle state of a chat turn."""
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class ChatTurn(BaseModel):
    """
    One user query and its answer slot.

    A turn is never mutated in place: state changes produce a new
    ChatTurn via model_copy, and a retry replaces a failed turn with a
    fresh one under a new id.
    """

    id: str = Field(..., description="Unique per controller, never reused")
    user_text: str = Field(..., description="Query text as typed, without the mode prefix")
    mode_label: str = Field(..., description="Label of the query mode active at send time")
    status: TurnStatus = Field(default=TurnStatus.PENDING)
    response: Optional[ComplianceResponse] = Field(
        default=None,
        description="Set only when status is resolved"
    )
    error_message: Optional[str] = Field(
        default=None,
        description="Set only when status is failed"
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_sample: bool = Field(default=False, description="Demo exchange, dropped on first submit")

    @property
    def is_pending(self) -> bool:
        return self.status == TurnStatus.PENDING

    @property
    def is_retryable(self) -> bool:
        return self.status == TurnStatus.FAILED
