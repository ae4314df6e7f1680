"""
Shared pytest fixtures for the compliance conversation tests.
"""

import asyncio
import json
import pytest
from typing import Any, Dict, List, Optional

from packs.compliance import COMPLIANCE_QUERY_MODES


# ============================================================================
# AGENT PAYLOAD FIXTURES
# ============================================================================

@pytest.fixture
def structured_result() -> Dict[str, Any]:
    """A fully populated structured answer, as the agent emits it."""
    return {
        "summary": "Data principals have rights to access, correction and erasure.",
        "query_type": "General Q&A",
        "citations": [
            {
                "framework": "DPDP Act 2023",
                "section": "Section 11",
                "excerpt": "Right to obtain a summary of personal data.",
                "relevance": "Right to information",
            },
            {
                "framework": "DPDP Act 2023",
                "section": "Section 12",
                "excerpt": "Right to correction and erasure.",
                "relevance": "Correction rights",
            },
        ],
        "analysis": {
            "detailed_explanation": "## Rights\n\nThe Act grants four core rights.",
            "cross_references": [
                {
                    "framework_a": "DPDP Act 2023",
                    "framework_b": "GDPR",
                    "overlap": "Access and erasure",
                    "unique_to_a": "Right to nominate",
                    "unique_to_b": "Data portability",
                },
            ],
            "risk_items": [
                {
                    "risk": "No DSAR process",
                    "severity": "High",
                    "impact": "Penalties",
                    "remediation": "Build a request portal",
                },
            ],
            "checklist_items": [
                {
                    "item": "Publish a privacy notice",
                    "category": "Documentation",
                    "status": "Required",
                    "priority": "High",
                },
            ],
        },
        "recommendations": [
            "Implement a DSAR portal",
            "Appoint a grievance officer",
        ],
    }


@pytest.fixture
def structured_payload(structured_result) -> Dict[str, Any]:
    """Envelope carrying the structured answer as an object."""
    return {"success": True, "response": {"result": structured_result}}


@pytest.fixture
def string_payload(structured_result) -> Dict[str, Any]:
    """Envelope carrying the structured answer as a fenced JSON string."""
    text = "Here is the analysis:\n```json\n" + json.dumps(structured_result) + "\n```"
    return {"success": True, "response": {"result": text}}


# ============================================================================
# TRANSPORT FIXTURES
# ============================================================================

class FakeTransport:
    """
    Scripted agent transport.

    Each call consumes the next outcome; the last outcome repeats. An
    outcome that is an exception is raised instead of returned. When a
    gate is set, calls wait on it before answering.
    """

    def __init__(self, *outcomes: Any, delay: float = 0.0):
        self.outcomes: List[Any] = list(outcomes) or [{"success": True, "response": {}}]
        self.delay = delay
        self.gate: Optional[asyncio.Event] = None
        self.calls: List[Dict[str, str]] = []

    async def send(self, message: str, session_id: str) -> Dict[str, Any]:
        self.calls.append({"message": message, "session_id": session_id})
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)

        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fake_transport():
    """Factory for scripted transports: fake_transport(outcome, ...)."""
    return FakeTransport


@pytest.fixture
def modes():
    """The compliance pack's query mode table."""
    return COMPLIANCE_QUERY_MODES
