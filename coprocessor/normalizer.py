"""
Schema Normalizer - Maps raw agent payloads onto ComplianceResponse.

normalize() is total: for any input it returns either a fully populated
ComplianceResponse or None, and it never raises. None means the payload
held nothing usable at all; everything else degrades to an empty-but-valid
record, with unparseable text kept as the summary.

Field defaults:

    summary, query_type, every string leaf      -> ""
    citations, recommendations, analysis lists  -> []
    analysis                                    -> Analysis() (all empty)

Keys present with the wrong type count as absent. Sequence entries of the
wrong shape are skipped; the rest keep their original order.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from core.logging import get_logger

from .parsing.lenient_json import ExtractionError, extract_with_repair
from .schemas.compliance import (
    Analysis,
    ChecklistItem,
    Citation,
    ComplianceResponse,
    CrossReference,
    RiskItem,
)

logger = get_logger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)

# snake_case wire key -> camelCase alias some agents emit instead
_ALIASES = {
    "query_type": "queryType",
    "detailed_explanation": "detailedExplanation",
    "cross_references": "crossReferences",
    "risk_items": "riskItems",
    "checklist_items": "checklistItems",
    "framework_a": "frameworkA",
    "framework_b": "frameworkB",
    "unique_to_a": "uniqueToA",
    "unique_to_b": "uniqueToB",
}


def _lookup(data: Dict[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    alias = _ALIASES.get(key)
    if alias is not None:
        return data.get(alias)
    return None


def _text(data: Dict[str, Any], key: str) -> str:
    value = _lookup(data, key)
    return value if isinstance(value, str) else ""


def _sequence(data: Dict[str, Any], key: str) -> List[Any]:
    value = _lookup(data, key)
    return value if isinstance(value, list) else []


def _items(data: Dict[str, Any], key: str, model: Type[ItemT]) -> List[ItemT]:
    """Build typed entries from a list of objects, skipping non-objects."""
    items = []
    for entry in _sequence(data, key):
        if not isinstance(entry, dict):
            continue
        items.append(model(**{
            field: _text(entry, field) for field in model.model_fields
        }))
    return items


def _build_response(data: Dict[str, Any]) -> ComplianceResponse:
    analysis_data = _lookup(data, "analysis")
    if not isinstance(analysis_data, dict):
        analysis_data = {}

    return ComplianceResponse(
        summary=_text(data, "summary"),
        query_type=_text(data, "query_type"),
        citations=_items(data, "citations", Citation),
        analysis=Analysis(
            detailed_explanation=_text(analysis_data, "detailed_explanation"),
            cross_references=_items(analysis_data, "cross_references", CrossReference),
            risk_items=_items(analysis_data, "risk_items", RiskItem),
            checklist_items=_items(analysis_data, "checklist_items", ChecklistItem),
        ),
        recommendations=[
            entry for entry in _sequence(data, "recommendations")
            if isinstance(entry, str)
        ],
    )


def _fallback_text(result: Any, response: Dict[str, Any]) -> Optional[str]:
    """First non-empty plain-text candidate: the raw result, then message."""
    candidates = []
    if isinstance(result, str):
        candidates.append(("result", result))
    candidates.append(("message", response.get("message")))

    for source, value in candidates:
        if value is None or isinstance(value, (dict, list)):
            continue
        text = value.strip() if isinstance(value, str) else str(value)
        if text:
            logger.normalization_fallback(source=source, text_length=len(text))
            return text
    return None


def normalize(payload: Any) -> Optional[ComplianceResponse]:
    """
    Normalize a raw agent envelope into a ComplianceResponse.

    Args:
        payload: Envelope returned by the agent transport; the answer is
            expected under payload["response"]["result"] as an object or
            as a string containing JSON

    Returns:
        A fully populated ComplianceResponse, or None when the payload
        contains nothing usable
    """
    response = payload.get("response") if isinstance(payload, dict) else None
    if not isinstance(response, dict):
        response = {}
    result = response.get("result")

    parsed = result
    if isinstance(result, str):
        parsed, repair = extract_with_repair(result)
        if isinstance(parsed, ExtractionError):
            logger.extraction_failed(reason=parsed.reason, raw_length=len(result))
            parsed = None
        elif repair is not None:
            logger.extraction_repaired(repair=repair, raw_length=len(result))

    # Some agents double-wrap the answer as {"result": {...}}
    if isinstance(parsed, dict) and isinstance(parsed.get("result"), dict):
        parsed = parsed["result"]

    if isinstance(parsed, dict):
        return _build_response(parsed)

    text = _fallback_text(result, response)
    if text:
        return ComplianceResponse(summary=text)

    logger.normalization_empty()
    return None
