"""
Coprocessor Module - Conversation core for the compliance assistant.

BOUNDARIES:
- The remote agent is an opaque text-in, envelope-out service
- Agent output is never trusted: everything passes through normalize()
- normalize() and extract() never raise; failure is a value
- The TurnController is the only writer of turn state

Components:
- extract: lenient JSON recovery from free-text LLM output
- normalize: raw envelope -> ComplianceResponse (or None)
- TurnController: single-flight turn lifecycle for one session
"""

from .agents.compliance_agent import AgentTransport, ComplianceAgentClient, TransportError
from .controller import TurnController
from .normalizer import normalize
from .parsing.lenient_json import ExtractionError, extract
from .schemas.compliance import ComplianceResponse
from .schemas.turn import ChatTurn, TurnStatus

__all__ = [
    "AgentTransport",
    "ComplianceAgentClient",
    "TransportError",
    "TurnController",
    "normalize",
    "ExtractionError",
    "extract",
    "ComplianceResponse",
    "ChatTurn",
    "TurnStatus",
]
