"""
Compliance Pack - Domain configuration for the compliance assistant.

Provides the query mode table, starter queries, and a sample exchange.

Query Modes (5):
- general - General Q&A (sent without a prefix)
- cross-reference - Compare frameworks
- gap-analysis - Identify coverage gaps
- checklist - Generate checklists
- risk-assessment - Assess compliance risks
"""

from .query_modes import COMPLIANCE_QUERY_MODES, STARTER_QUERIES, get_mode
from .sample_data import SAMPLE_MODE_ID, SAMPLE_QUERY, SAMPLE_RESPONSE

__all__ = [
    "COMPLIANCE_QUERY_MODES",
    "STARTER_QUERIES",
    "get_mode",
    "SAMPLE_MODE_ID",
    "SAMPLE_QUERY",
    "SAMPLE_RESPONSE",
]
