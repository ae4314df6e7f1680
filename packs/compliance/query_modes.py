"""
Compliance Pack - Query Modes.

The mode table handed to the turn controller. Order is display order;
the first entry is the default mode.
"""

from typing import Dict

from coprocessor.schemas.modes import QueryModeConfig


COMPLIANCE_QUERY_MODES: Dict[str, QueryModeConfig] = {
    "general": QueryModeConfig(
        mode_id="general",
        label="General Q&A",
        description="Ask any compliance question",
        prefix_query=False,
    ),
    "cross-reference": QueryModeConfig(
        mode_id="cross-reference",
        label="Cross-Reference",
        description="Compare frameworks",
    ),
    "gap-analysis": QueryModeConfig(
        mode_id="gap-analysis",
        label="Gap Analysis",
        description="Identify coverage gaps",
    ),
    "checklist": QueryModeConfig(
        mode_id="checklist",
        label="Checklist",
        description="Generate checklists",
    ),
    "risk-assessment": QueryModeConfig(
        mode_id="risk-assessment",
        label="Risk Assessment",
        description="Assess compliance risks",
    ),
}


STARTER_QUERIES = [
    "What are the data principal rights under DPDP Act?",
    "Compare ISO 27001 Annex A controls with DPDP Act provisions",
    "Generate a DPDP Act compliance checklist",
    "Assess risks for non-compliance with data protection requirements",
    "Explain the data processor obligations under DPDP Act",
]


def get_mode(mode_id: str) -> QueryModeConfig:
    """Look up a mode, raising KeyError for unknown ids."""
    return COMPLIANCE_QUERY_MODES[mode_id]
