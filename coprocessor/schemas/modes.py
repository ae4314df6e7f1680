"""
Query Mode Schemas - Configuration for the query modes a pack offers.
"""

from pydantic import BaseModel, Field, field_validator


class QueryModeConfig(BaseModel):
    """Configuration for a query mode."""

    mode_id: str = Field(..., description="Stable identifier (e.g., gap-analysis)")
    label: str = Field(..., description="Human-readable label shown on turns")
    description: str = Field(default="", description="What this mode is for")
    prefix_query: bool = Field(
        default=True,
        description="Whether the label is sent to the agent as a query prefix"
    )

    @field_validator("mode_id", "label")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure identifiers and labels are not empty."""
        if not v or not v.strip():
            raise ValueError("mode_id and label cannot be empty")
        return v.strip()

    def format_query(self, text: str) -> str:
        """Text as transmitted to the agent for this mode."""
        if self.prefix_query:
            return f"[Query Mode: {self.label}] {text}"
        return text
