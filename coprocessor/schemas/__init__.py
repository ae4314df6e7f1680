"""
Coprocessor Schemas - Data models for agent answers and chat turns.

All agent answers are normalized into these models before use.
"""

from .compliance import (
    Analysis,
    ChecklistItem,
    Citation,
    ComplianceResponse,
    CrossReference,
    RiskItem,
)
from .modes import QueryModeConfig
from .turn import ChatTurn, TurnStatus

__all__ = [
    "Analysis",
    "ChecklistItem",
    "Citation",
    "ComplianceResponse",
    "CrossReference",
    "RiskItem",
    "QueryModeConfig",
    "ChatTurn",
    "TurnStatus",
]
