"""
TurnController - Drives the chat turns of one conversation.

The controller is the only writer of turn state. It runs at most one agent
call at a time (single-flight): submissions made while a turn is pending
are rejected without creating a turn, and so are blank submissions.

Per-turn state machine:

    pending --(transport ok, normalize -> record)--> resolved
    pending --(transport ok, normalize -> None)----> failed
    pending --(transport error)--------------------> failed
    failed  --(user retry)--> removed; new pending turn at the end

Turns are kept in creation order. Turn ids are never reused. The core
enforces no timeout: a call that never settles leaves its turn pending.
"""

import asyncio
import itertools
import time
from typing import Callable, Dict, List, Mapping, Optional

from core.logging import get_logger

from .agents.compliance_agent import AgentTransport, TransportError
from .normalizer import normalize
from .schemas.compliance import ComplianceResponse
from .schemas.modes import QueryModeConfig
from .schemas.turn import ChatTurn, TurnStatus

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please try again."
NO_USABLE_RESPONSE_MESSAGE = "The agent returned no usable response. Please try again."

TurnListener = Callable[[ChatTurn], None]


class TurnController:
    """
    Owns the ordered turns of a single conversation session.

    All methods must be called from the event loop that runs the agent
    calls; the controller relies on that loop for serialization and uses
    no locks.
    """

    def __init__(
        self,
        transport: AgentTransport,
        session_id: str,
        modes: Mapping[str, QueryModeConfig],
        mode: Optional[str] = None,
        listener: Optional[TurnListener] = None,
    ):
        """
        Initialize the controller.

        Args:
            transport: Delivers queries to the agent
            session_id: Opaque token passed through on every agent call
            modes: Query mode lookup table (mode_id -> config), in display order
            mode: Initially selected mode id (defaults to the first entry)
            listener: Called with the new state of a turn after every change
        """
        if not modes:
            raise ValueError("At least one query mode is required")

        self.session_id = session_id
        self._transport = transport
        self._modes: Dict[str, QueryModeConfig] = dict(modes)
        self._mode_id = next(iter(self._modes))
        self._listener = listener
        self._turns: List[ChatTurn] = []
        self._ids = itertools.count(1)
        self._inflight: Optional[asyncio.Task] = None

        if mode is not None:
            self.set_mode(mode)

    # ===== Read-only views =====

    @property
    def turns(self) -> List[ChatTurn]:
        """Snapshot of the turns in creation order."""
        return list(self._turns)

    @property
    def mode(self) -> QueryModeConfig:
        return self._modes[self._mode_id]

    @property
    def pending_turn(self) -> Optional[ChatTurn]:
        for turn in self._turns:
            if turn.status == TurnStatus.PENDING:
                return turn
        return None

    @property
    def is_busy(self) -> bool:
        return self.pending_turn is not None

    def get_turn(self, turn_id: str) -> Optional[ChatTurn]:
        index = self._index_of(turn_id)
        return self._turns[index] if index is not None else None

    # ===== Operations =====

    def set_mode(self, mode_id: str) -> QueryModeConfig:
        """Select the query mode used for subsequent submissions."""
        if mode_id not in self._modes:
            raise ValueError(
                f"Unknown query mode '{mode_id}'. Valid modes: {', '.join(self._modes)}"
            )
        self._mode_id = mode_id
        return self.mode

    def submit(self, text: str) -> Optional[str]:
        """
        Start a new turn for text.

        Must be called with a running event loop; the agent call is
        scheduled on it and settles in the background.

        Returns:
            The new turn id, or None when the submission is rejected
            (blank text, or another turn is still pending)
        """
        user_text = text.strip() if isinstance(text, str) else ""
        if not user_text:
            logger.submission_rejected(self.session_id, reason="blank")
            return None

        pending = self.pending_turn
        if pending is not None:
            logger.submission_rejected(
                self.session_id, reason="in_flight", pending_turn_id=pending.id
            )
            return None

        self._turns = [turn for turn in self._turns if not turn.is_sample]

        mode = self.mode
        turn = ChatTurn(
            id=f"turn-{next(self._ids)}",
            user_text=user_text,
            mode_label=mode.label,
        )
        self._turns.append(turn)
        logger.turn_submitted(
            self.session_id, turn.id, mode.label, prefixed=mode.prefix_query
        )
        self._notify(turn)

        message = mode.format_query(user_text)
        self._inflight = asyncio.get_running_loop().create_task(
            self._settle(turn.id, message)
        )
        return turn.id

    def retry(self, turn_id: str) -> Optional[str]:
        """
        Replace a failed turn with a fresh pending turn at the end.

        Returns:
            The new turn id, or None when turn_id is not a failed turn or
            another turn is pending (nothing is removed in that case)
        """
        turn = self.get_turn(turn_id)
        if turn is None or turn.status != TurnStatus.FAILED:
            logger.submission_rejected(self.session_id, reason="not_retryable")
            return None
        if self.is_busy:
            logger.submission_rejected(
                self.session_id, reason="in_flight", pending_turn_id=self.pending_turn.id
            )
            return None

        self._turns = [t for t in self._turns if t.id != turn_id]
        new_turn_id = self.submit(turn.user_text)
        if new_turn_id is not None:
            logger.turn_retried(self.session_id, turn_id, new_turn_id)
        return new_turn_id

    async def wait_idle(self) -> None:
        """Wait for the in-flight agent call, if any, to settle."""
        task = self._inflight
        if task is not None and not task.done():
            await asyncio.shield(task)

    # ===== Sample exchange =====

    def load_sample(
        self,
        response: ComplianceResponse,
        user_text: str,
        mode_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Show a resolved demo exchange in an empty conversation.

        Returns:
            The sample turn id, or None when the conversation is not empty
        """
        if self._turns:
            return None

        mode = self._modes.get(mode_id, self.mode) if mode_id else self.mode
        turn = ChatTurn(
            id=f"turn-{next(self._ids)}",
            user_text=user_text,
            mode_label=mode.label,
            status=TurnStatus.RESOLVED,
            response=response,
            is_sample=True,
        )
        self._turns.append(turn)
        self._notify(turn)
        return turn.id

    def clear_sample(self) -> int:
        """Remove demo turns. Returns how many were removed."""
        before = len(self._turns)
        self._turns = [turn for turn in self._turns if not turn.is_sample]
        return before - len(self._turns)

    # ===== Settlement =====

    async def _settle(self, turn_id: str, message: str) -> None:
        started = time.monotonic()
        try:
            payload = await self._transport.send(message, self.session_id)
        except TransportError as e:
            logger.agent_call_failed(self.session_id, turn_id, str(e))
            self._fail(turn_id, e.message or NETWORK_ERROR_MESSAGE, started)
            return
        except Exception as e:
            logger.agent_call_failed(
                self.session_id, turn_id, f"{type(e).__name__}: {e}", unexpected=True
            )
            self._fail(turn_id, NETWORK_ERROR_MESSAGE, started)
            return

        try:
            response = normalize(payload)
        except Exception as e:
            logger.normalization_crashed(self.session_id, turn_id, f"{type(e).__name__}: {e}")
            response = None

        if response is None:
            self._fail(turn_id, NO_USABLE_RESPONSE_MESSAGE, started)
            return

        turn = self._replace(
            turn_id, status=TurnStatus.RESOLVED, response=response
        )
        if turn is not None:
            logger.turn_resolved(
                self.session_id,
                turn_id,
                structured=response.is_structured(),
                duration_ms=(time.monotonic() - started) * 1000,
            )

    def _fail(self, turn_id: str, error_message: str, started: float) -> None:
        turn = self._replace(
            turn_id, status=TurnStatus.FAILED, error_message=error_message
        )
        if turn is not None:
            logger.turn_failed(
                self.session_id,
                turn_id,
                error_message,
                duration_ms=(time.monotonic() - started) * 1000,
            )

    def _replace(self, turn_id: str, **changes) -> Optional[ChatTurn]:
        """Swap in a settled copy of a pending turn, keeping its position."""
        index = self._index_of(turn_id)
        if index is None or self._turns[index].status != TurnStatus.PENDING:
            return None
        turn = self._turns[index].model_copy(update=changes)
        self._turns[index] = turn
        self._notify(turn)
        return turn

    def _index_of(self, turn_id: str) -> Optional[int]:
        for index, turn in enumerate(self._turns):
            if turn.id == turn_id:
                return index
        return None

    def _notify(self, turn: ChatTurn) -> None:
        if self._listener is None:
            return
        try:
            self._listener(turn)
        except Exception:
            logger.listener_failed(self.session_id, turn.id)
