"""
ComplianceAgentClient - Transport to the remote compliance agent.

The agent is a hosted, LLM-backed service. This module only moves the
query there and the raw envelope back; normalizing the envelope is the
job of coprocessor.normalizer.

Envelope returned on success:

    {"success": true, "response": {"result": <object | JSON string>, "message": "..."}}

An envelope with "success": false is an agent-reported failure and is
raised as TransportError, like network and HTTP errors.
"""

from typing import Any, Dict, Optional, Protocol

import httpx

from core.config import settings


class TransportError(Exception):
    """
    The agent call failed.

    message is the diagnostic to show the user, or None when only a
    generic network error can be reported. detail keeps the low-level
    cause for logs.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message or detail or "agent call failed")
        self.message = message
        self.status_code = status_code
        self.detail = detail


class AgentTransport(Protocol):
    """Anything that can deliver a query to the agent."""

    async def send(self, message: str, session_id: str) -> Dict[str, Any]:
        """Return the raw envelope or raise TransportError."""
        ...


class ComplianceAgentClient:
    """
    HTTP client for the compliance agent.

    The underlying httpx.AsyncClient is created on first use and must be
    released with aclose() (or by using the client as an async context
    manager).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        agent_id: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Agent API root (defaults to settings.agent_base_url)
            agent_id: Agent to address (defaults to settings.agent_id)
            api_key: API key sent as x-api-key (defaults to settings.agent_api_key)
            timeout: Per-request timeout in seconds; None disables it
            transport: Optional httpx transport, used by tests
        """
        self.base_url = (base_url or settings.agent_base_url).rstrip("/")
        self.agent_id = agent_id or settings.agent_id
        self.api_key = api_key if api_key is not None else settings.agent_api_key
        self.timeout = timeout if timeout is not None else settings.agent_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily initialize the HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["x-api-key"] = self.api_key
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def send(self, message: str, session_id: str) -> Dict[str, Any]:
        """
        Send one query to the agent.

        Args:
            message: Query text, already carrying any mode prefix
            session_id: Opaque session token, passed through unchanged

        Returns:
            The raw response envelope

        Raises:
            TransportError: On network failure, HTTP error status, a
                non-JSON body, or an agent-reported error
        """
        client = self._get_client()
        body = {
            "message": message,
            "agent_id": self.agent_id,
            "session_id": session_id,
        }

        try:
            response = await client.post("/agent", json=body)
        except httpx.HTTPError as e:
            raise TransportError(detail=f"{type(e).__name__}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            error = data.get("error") if isinstance(data, dict) else None
            raise TransportError(
                message=error if isinstance(error, str) and error else
                f"Agent returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise TransportError(
                message="Agent returned a malformed response.",
                status_code=response.status_code,
            )

        if data.get("success") is False:
            error = data.get("error")
            raise TransportError(
                message=error if isinstance(error, str) and error else None,
                status_code=response.status_code,
                detail="agent reported failure",
            )

        return data

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ComplianceAgentClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
