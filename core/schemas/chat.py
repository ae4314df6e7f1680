"""
Pydantic schemas for the Chat API.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from coprocessor.schemas.modes import QueryModeConfig
from coprocessor.schemas.turn import ChatTurn


class ModeListResponse(BaseModel):
    """Available query modes and starter queries."""
    items: List[QueryModeConfig]
    default_mode: str
    starter_queries: List[str] = Field(default_factory=list)


class SessionCreate(BaseModel):
    """Schema for starting a conversation."""
    mode: Optional[str] = Field(None, description="Initial query mode id")


class SessionResponse(BaseModel):
    """Schema for a conversation session."""
    session_id: str
    mode: QueryModeConfig
    busy: bool = Field(False, description="True while a turn is pending")
    turns: List[ChatTurn] = Field(default_factory=list)


class TurnCreate(BaseModel):
    """Schema for submitting a query."""
    text: str = Field(..., description="Query text, without any mode prefix")
    mode: Optional[str] = Field(None, description="Switch to this query mode before sending")


class SubmitResponse(BaseModel):
    """
    Result of a submit or retry.

    Rejections (blank text, a turn already in flight, a turn that is
    not retryable) are reported with accepted=False rather than as errors.
    """
    accepted: bool
    turn: Optional[ChatTurn] = None
    reason: Optional[str] = Field(None, description="blank, in_flight, or not_retryable")


class TurnListResponse(BaseModel):
    """Schema for the ordered turn list."""
    items: List[ChatTurn]
    total: int
    busy: bool


class SampleRequest(BaseModel):
    """Schema for toggling the sample exchange."""
    show: bool = True
