"""
Tests for the compliance command-line interface.
"""

import argparse
import json

import pytest

from coprocessor import cli
from coprocessor.agents.compliance_agent import TransportError


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from replacing pytest's log handlers."""
    monkeypatch.setattr(cli, "setup_logging", lambda: None)


def _ask_args(text, mode="general", as_json=False):
    return argparse.Namespace(text=text, mode=mode, session=None, json=as_json)


class TestParser:
    """Tests for argument parsing."""

    def test_ask_defaults(self):
        """Test ask options and their defaults."""
        args = cli.build_parser().parse_args(["ask", "What are the rights?"])

        assert args.command == "ask"
        assert args.text == "What are the rights?"
        assert args.mode == "general"
        assert args.session is None
        assert args.json is False

    def test_command_required(self):
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestModesAndSample:
    """Tests for the offline commands."""

    def test_modes(self, capsys):
        """Test listing modes."""
        assert cli.main(["modes"]) == 0

        out = capsys.readouterr().out
        assert "gap-analysis" in out
        assert "Try asking:" in out

    def test_sample_markdown(self, capsys):
        """Test printing the sample as markdown."""
        assert cli.main(["sample"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("> What are the data principal rights")
        assert "## Risk Assessment (2: 1 high, 1 medium)" in out

    def test_sample_json(self, capsys):
        """Test printing the sample as JSON."""
        assert cli.main(["sample", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert len(data["citations"]) == 3


class TestAsk:
    """Tests for the ask command."""

    def test_ask_prints_markdown(self, capsys, fake_transport, structured_payload):
        """Test a successful query."""
        transport = fake_transport(structured_payload)

        code = cli.cmd_ask(_ask_args("What are the rights?", mode="checklist"), transport=transport)

        assert code == 0
        assert transport.calls[0]["message"] == "[Query Mode: Checklist] What are the rights?"
        assert transport.calls[0]["session_id"].startswith("sess_")
        assert "## Citations (2)" in capsys.readouterr().out

    def test_ask_json(self, capsys, fake_transport, structured_payload):
        """Test a successful query printed as JSON."""
        code = cli.cmd_ask(
            _ask_args("What are the rights?", as_json=True),
            transport=fake_transport(structured_payload),
        )

        assert code == 0
        assert json.loads(capsys.readouterr().out)["query_type"] == "General Q&A"

    def test_ask_failure(self, capsys, fake_transport):
        """Test that a failed turn exits non-zero with its message."""
        code = cli.cmd_ask(
            _ask_args("Question"),
            transport=fake_transport(TransportError("Rate limit exceeded")),
        )

        assert code == 1
        assert "Error: Rate limit exceeded" in capsys.readouterr().out

    def test_ask_blank(self, capsys, fake_transport):
        """Test that blank text is refused."""
        transport = fake_transport()

        assert cli.cmd_ask(_ask_args("   "), transport=transport) == 1
        assert transport.calls == []

    def test_ask_unknown_mode(self, capsys, fake_transport):
        """Test that unknown modes are refused before any call."""
        transport = fake_transport()

        assert cli.cmd_ask(_ask_args("Question", mode="poetry"), transport=transport) == 1
        assert "Unknown mode" in capsys.readouterr().out
        assert transport.calls == []
