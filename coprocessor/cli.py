"""
Compliance CLI - Command-line interface for one-off compliance queries.

Usage:
    python -m coprocessor.cli modes
    python -m coprocessor.cli sample --json
    python -m coprocessor.cli ask "Generate a DPDP Act compliance checklist" --mode checklist
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from core.config import settings
from core.logging import setup_logging
from packs.compliance import (
    COMPLIANCE_QUERY_MODES,
    SAMPLE_QUERY,
    SAMPLE_RESPONSE,
    STARTER_QUERIES,
    get_mode,
)

from .agents.compliance_agent import AgentTransport, ComplianceAgentClient
from .controller import TurnController
from .formatting import format_response_markdown
from .schemas.compliance import ComplianceResponse
from .schemas.turn import ChatTurn, TurnStatus
from .session import generate_session_id


def _print_response(response: ComplianceResponse, as_json: bool) -> None:
    if as_json:
        print(json.dumps(response.model_dump(mode="json"), indent=2))
    else:
        print(format_response_markdown(response))


def cmd_modes(args) -> int:
    """List query modes and starter queries."""
    print("Query modes:")
    for mode in COMPLIANCE_QUERY_MODES.values():
        marker = "*" if mode.mode_id == settings.default_mode else " "
        print(f" {marker} {mode.mode_id:<16} {mode.label:<16} {mode.description}")

    print("\nTry asking:")
    for query in STARTER_QUERIES:
        print(f"  - {query}")
    return 0


def cmd_sample(args) -> int:
    """Print the sample exchange."""
    if not args.json:
        print(f"> {SAMPLE_QUERY}\n")
    _print_response(SAMPLE_RESPONSE, args.json)
    return 0


async def run_query(
    text: str,
    mode: str,
    session_id: Optional[str] = None,
    transport: Optional[AgentTransport] = None,
) -> Optional[ChatTurn]:
    """
    Run a single turn to completion.

    Returns:
        The settled turn, or None if the text was rejected as blank
    """
    client = transport or ComplianceAgentClient()
    controller = TurnController(
        transport=client,
        session_id=session_id or generate_session_id(),
        modes=COMPLIANCE_QUERY_MODES,
        mode=mode,
    )
    try:
        turn_id = controller.submit(text)
        if turn_id is None:
            return None
        await controller.wait_idle()
        return controller.get_turn(turn_id)
    finally:
        if transport is None:
            await client.aclose()


def cmd_ask(args, transport: Optional[AgentTransport] = None) -> int:
    """Send one query to the agent and print the answer."""
    try:
        mode = get_mode(args.mode)
    except KeyError:
        print(f"Error: Unknown mode '{args.mode}'. Valid modes: {', '.join(COMPLIANCE_QUERY_MODES)}")
        return 1

    turn = asyncio.run(run_query(args.text, mode.mode_id, args.session, transport))
    if turn is None:
        print("Error: Query text is empty")
        return 1

    if turn.status == TurnStatus.FAILED:
        print(f"Error: {turn.error_message}")
        return 1

    _print_response(turn.response, args.json)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compliance",
        description="Compliance Hub - query the compliance agent from the command line",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("modes", help="List query modes and starter queries")

    sample_parser = subparsers.add_parser("sample", help="Print the sample exchange")
    sample_parser.add_argument("--json", action="store_true", help="Print JSON instead of markdown")

    ask_parser = subparsers.add_parser("ask", help="Ask the compliance agent a question")
    ask_parser.add_argument("text", help="Question to ask")
    ask_parser.add_argument("--mode", default=settings.default_mode, help="Query mode id")
    ask_parser.add_argument("--session", default=None, help="Session id to reuse")
    ask_parser.add_argument("--json", action="store_true", help="Print JSON instead of markdown")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    commands = {
        "modes": cmd_modes,
        "sample": cmd_sample,
        "ask": cmd_ask,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
