"""
Compliance Schemas - Data models for normalized agent answers.

Every answer from the compliance agent is normalized into a
ComplianceResponse before it reaches a renderer. All fields are always
present: missing strings are "" and missing sequences are [].
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Citation(BaseModel):
    """A framework provision cited in support of the answer."""

    model_config = ConfigDict(frozen=True)

    framework: str = Field(default="", description="Framework name (e.g., DPDP Act 2023)")
    section: str = Field(default="", description="Section or control identifier")
    excerpt: str = Field(default="", description="Quoted text from the framework")
    relevance: str = Field(default="", description="Why this provision matters here")


class CrossReference(BaseModel):
    """Comparison of two frameworks."""

    model_config = ConfigDict(frozen=True)

    framework_a: str = ""
    framework_b: str = ""
    overlap: str = ""
    unique_to_a: str = ""
    unique_to_b: str = ""


class RiskItem(BaseModel):
    """A compliance risk with its severity and remediation."""

    model_config = ConfigDict(frozen=True)

    risk: str = ""
    severity: str = Field(default="", description="Free text; High/Medium/Low by convention")
    impact: str = ""
    remediation: str = ""


class ChecklistItem(BaseModel):
    """A single actionable checklist entry."""

    model_config = ConfigDict(frozen=True)

    item: str = ""
    category: str = ""
    status: str = ""
    priority: str = ""


class Analysis(BaseModel):
    """Structured analysis attached to a compliance answer."""

    model_config = ConfigDict(frozen=True)

    detailed_explanation: str = Field(default="", description="Markdown-formatted explanation")
    cross_references: List[CrossReference] = Field(default_factory=list)
    risk_items: List[RiskItem] = Field(default_factory=list)
    checklist_items: List[ChecklistItem] = Field(default_factory=list)


class ComplianceResponse(BaseModel):
    """
    A normalized answer from the compliance agent.

    Structure:
    - summary: Short prose answer (may be the whole answer on fallback)
    - query_type: Which query mode the agent believes it answered
    - citations: Provisions cited, in display order
    - analysis: Explanation, cross-references, risks, checklist
    - recommendations: Ordered action items

    Instances are immutable once built.
    """

    model_config = ConfigDict(frozen=True)

    summary: str = Field(default="", description="Prose summary of the answer")
    query_type: str = Field(default="", description="Query type reported by the agent")
    citations: List[Citation] = Field(default_factory=list)
    analysis: Analysis = Field(default_factory=Analysis)
    recommendations: List[str] = Field(default_factory=list)

    def is_structured(self) -> bool:
        """True when anything beyond the summary and query type is populated."""
        return any(count for count in self.section_counts().values())

    def section_counts(self) -> Dict[str, int]:
        """Item counts per renderable section."""
        return {
            "detailed_explanation": 1 if self.analysis.detailed_explanation else 0,
            "citations": len(self.citations),
            "cross_references": len(self.analysis.cross_references),
            "risk_items": len(self.analysis.risk_items),
            "checklist_items": len(self.analysis.checklist_items),
            "recommendations": len(self.recommendations),
        }
