"""
Rendering helpers for normalized compliance answers.

Renderers receive a ComplianceResponse that is always fully shaped, so
nothing here checks for missing fields; empty sections are simply skipped.
"""

from collections import Counter
from typing import Iterable, List

from .schemas.compliance import ComplianceResponse

_LEVEL_ORDER = ("high", "medium", "low", "unknown")


def classify_severity(severity: str) -> str:
    """Bucket free-text severity into high / medium / low / unknown."""
    s = (severity or "").lower()
    if "high" in s or "critical" in s:
        return "high"
    if "medium" in s or "moderate" in s:
        return "medium"
    if "low" in s or "minor" in s:
        return "low"
    return "unknown"


def classify_priority(priority: str) -> str:
    """Bucket free-text priority into high / medium / low / unknown."""
    p = (priority or "").lower()
    if "high" in p or "critical" in p:
        return "high"
    if "medium" in p:
        return "medium"
    if "low" in p:
        return "low"
    return "unknown"


def _level_breakdown(levels: Iterable[str]) -> str:
    """e.g. '2 high, 1 low' in fixed high-to-unknown order."""
    counts = Counter(levels)
    return ", ".join(f"{counts[level]} {level}" for level in _LEVEL_ORDER if counts[level])


def format_response_markdown(response: ComplianceResponse) -> str:
    """
    Format a compliance answer as markdown.

    Args:
        response: The normalized answer to format

    Returns:
        Markdown with one section per non-empty part of the answer
    """
    lines: List[str] = []

    if response.query_type:
        lines.append(f"*Query type: {response.query_type}*")
        lines.append("")

    if response.summary:
        lines.append("## Summary")
        lines.append("")
        lines.append(response.summary)
        lines.append("")

    analysis = response.analysis

    if analysis.detailed_explanation:
        lines.append("## Detailed Analysis")
        lines.append("")
        lines.append(analysis.detailed_explanation)
        lines.append("")

    if response.citations:
        lines.append(f"## Citations ({len(response.citations)})")
        lines.append("")
        for citation in response.citations:
            heading = " - ".join(p for p in (citation.framework, citation.section) if p)
            lines.append(f"- **{heading or 'Citation'}**")
            if citation.excerpt:
                lines.append(f"  > {citation.excerpt}")
            if citation.relevance:
                lines.append(f"  *{citation.relevance}*")
        lines.append("")

    if analysis.cross_references:
        lines.append(f"## Cross-References ({len(analysis.cross_references)})")
        lines.append("")
        for ref in analysis.cross_references:
            lines.append(f"### {ref.framework_a or '?'} vs {ref.framework_b or '?'}")
            if ref.overlap:
                lines.append(f"- Overlap: {ref.overlap}")
            if ref.unique_to_a:
                lines.append(f"- Unique to {ref.framework_a or 'A'}: {ref.unique_to_a}")
            if ref.unique_to_b:
                lines.append(f"- Unique to {ref.framework_b or 'B'}: {ref.unique_to_b}")
            lines.append("")

    if analysis.risk_items:
        levels = _level_breakdown(classify_severity(r.severity) for r in analysis.risk_items)
        lines.append(f"## Risk Assessment ({len(analysis.risk_items)}: {levels})")
        lines.append("")
        for item in analysis.risk_items:
            severity = item.severity or "Unknown"
            lines.append(f"- [{severity}] {item.risk}")
            if item.impact:
                lines.append(f"  - Impact: {item.impact}")
            if item.remediation:
                lines.append(f"  - Remediation: {item.remediation}")
        lines.append("")

    if analysis.checklist_items:
        levels = _level_breakdown(classify_priority(c.priority) for c in analysis.checklist_items)
        lines.append(f"## Compliance Checklist ({len(analysis.checklist_items)}: {levels})")
        lines.append("")
        for item in analysis.checklist_items:
            tags = ", ".join(t for t in (item.category, item.status, item.priority) if t)
            suffix = f" ({tags})" if tags else ""
            lines.append(f"- [ ] {item.item}{suffix}")
        lines.append("")

    if response.recommendations:
        lines.append(f"## Recommendations ({len(response.recommendations)})")
        lines.append("")
        for number, recommendation in enumerate(response.recommendations, start=1):
            lines.append(f"{number}. {recommendation}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
