"""
Conversation sessions - one TurnController per session id.

Sessions live only in process memory; nothing is persisted.
"""

import asyncio
import secrets
import string
from typing import Dict, Mapping, Optional

from .agents.compliance_agent import AgentTransport
from .controller import TurnController
from .schemas.modes import QueryModeConfig

_BASE36 = string.digits + string.ascii_lowercase


def generate_session_id() -> str:
    """Opaque session token: 'sess_' followed by 26 base36 characters."""
    return "sess_" + "".join(secrets.choice(_BASE36) for _ in range(26))


class SessionRegistry:
    """In-memory map of session id -> TurnController sharing one transport."""

    def __init__(
        self,
        transport: AgentTransport,
        modes: Mapping[str, QueryModeConfig],
        default_mode: Optional[str] = None,
    ):
        self.transport = transport
        self.modes = dict(modes)
        self.default_mode = default_mode
        self._sessions: Dict[str, TurnController] = {}

    def create(self, mode: Optional[str] = None) -> TurnController:
        """Start a new conversation. Raises ValueError for an unknown mode."""
        session_id = generate_session_id()
        while session_id in self._sessions:
            session_id = generate_session_id()
        controller = TurnController(
            transport=self.transport,
            session_id=session_id,
            modes=self.modes,
            mode=mode or self.default_mode,
        )
        self._sessions[session_id] = controller
        return controller

    def get(self, session_id: str) -> Optional[TurnController]:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> Optional[TurnController]:
        """
        End a conversation and drop its turns.

        Sessions with a call in flight are kept.

        Returns:
            The removed controller, or None if the session is unknown or busy
        """
        controller = self._sessions.get(session_id)
        if controller is None or controller.is_busy:
            return None
        del self._sessions[session_id]
        return controller

    def __len__(self) -> int:
        return len(self._sessions)

    async def drain(self) -> None:
        """Wait for every in-flight agent call to settle."""
        await asyncio.gather(
            *(controller.wait_idle() for controller in self._sessions.values())
        )

    async def aclose(self) -> None:
        """Drain sessions, then close the transport if it can be closed."""
        await self.drain()
        close = getattr(self.transport, "aclose", None)
        if close is not None:
            await close()
