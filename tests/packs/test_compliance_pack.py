"""
Tests for Compliance Pack - Query modes and sample exchange.
"""

import pytest


class TestComplianceQueryModes:
    """Tests for the query mode table."""

    @pytest.fixture
    def query_modes(self):
        """Load compliance query modes."""
        from packs.compliance.query_modes import COMPLIANCE_QUERY_MODES
        return COMPLIANCE_QUERY_MODES

    def test_query_modes_count(self, query_modes):
        """Test that all 5 query modes are defined."""
        assert len(query_modes) == 5

    def test_display_order(self, query_modes):
        """Test that general comes first as the default."""
        assert list(query_modes) == [
            "general",
            "cross-reference",
            "gap-analysis",
            "checklist",
            "risk-assessment",
        ]

    def test_keys_match_mode_ids(self, query_modes):
        """Test that each key is its mode's id."""
        for mode_id, mode in query_modes.items():
            assert mode.mode_id == mode_id

    def test_only_general_is_unprefixed(self, query_modes):
        """Test that General Q&A is sent without a prefix."""
        unprefixed = [m.mode_id for m in query_modes.values() if not m.prefix_query]
        assert unprefixed == ["general"]

    def test_labels(self, query_modes):
        """Test the labels sent to the agent."""
        assert [m.label for m in query_modes.values()] == [
            "General Q&A",
            "Cross-Reference",
            "Gap Analysis",
            "Checklist",
            "Risk Assessment",
        ]

    def test_get_mode(self):
        """Test lookup by id."""
        from packs.compliance import get_mode

        assert get_mode("checklist").label == "Checklist"
        with pytest.raises(KeyError):
            get_mode("poetry")

    def test_starter_queries(self):
        """Test that starter queries are non-blank."""
        from packs.compliance import STARTER_QUERIES

        assert len(STARTER_QUERIES) == 5
        assert all(q.strip() for q in STARTER_QUERIES)


class TestSampleExchange:
    """Tests for the sample exchange."""

    def test_sample_is_fully_structured(self):
        """Test that the sample exercises every section."""
        from packs.compliance import SAMPLE_RESPONSE

        counts = SAMPLE_RESPONSE.section_counts()
        assert all(counts.values()), f"Empty sections: {[k for k, v in counts.items() if not v]}"
        assert len(SAMPLE_RESPONSE.citations) == 3
        assert len(SAMPLE_RESPONSE.analysis.risk_items) == 2
        assert len(SAMPLE_RESPONSE.analysis.checklist_items) == 5
        assert len(SAMPLE_RESPONSE.recommendations) == 5

    def test_sample_mode_exists(self):
        """Test that the sample's mode is in the mode table."""
        from packs.compliance import COMPLIANCE_QUERY_MODES, SAMPLE_MODE_ID, SAMPLE_QUERY

        assert SAMPLE_MODE_ID in COMPLIANCE_QUERY_MODES
        assert SAMPLE_QUERY.strip()
