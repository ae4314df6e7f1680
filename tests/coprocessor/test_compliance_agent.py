"""
Tests for the ComplianceAgentClient HTTP transport.

Requests are answered by httpx.MockTransport, so nothing leaves the process.
"""

import asyncio
import json

import httpx
import pytest

from coprocessor.agents.compliance_agent import ComplianceAgentClient, TransportError


def _client(handler, **kwargs) -> ComplianceAgentClient:
    return ComplianceAgentClient(
        base_url="http://agent.test/api/",
        agent_id="compliance-analyst",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _send(client: ComplianceAgentClient, message: str = "Hello", session_id: str = "sess_1"):
    async def run():
        async with client:
            return await client.send(message, session_id)

    return asyncio.run(run())


class TestRequest:
    """Tests for the outgoing request."""

    def test_posts_message_and_session(self):
        """Test the request URL and JSON body."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            seen["api_key"] = request.headers.get("x-api-key")
            return httpx.Response(200, json={"success": True, "response": {"result": "ok"}})

        _send(_client(handler), "[Query Mode: Checklist] Make a list", "sess_abc")

        assert seen["method"] == "POST"
        assert seen["url"] == "http://agent.test/api/agent"
        assert seen["body"] == {
            "message": "[Query Mode: Checklist] Make a list",
            "agent_id": "compliance-analyst",
            "session_id": "sess_abc",
        }
        assert seen["api_key"] is None

    def test_api_key_header(self):
        """Test that a configured API key is sent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["api_key"] = request.headers.get("x-api-key")
            return httpx.Response(200, json={"success": True, "response": {}})

        _send(_client(handler, api_key="secret"))

        assert seen["api_key"] == "secret"


class TestResponses:
    """Tests for mapping HTTP outcomes."""

    def test_returns_envelope(self):
        """Test that a successful envelope is returned unchanged."""
        envelope = {"success": True, "response": {"result": {"summary": "ok"}, "message": "done"}}

        result = _send(_client(lambda request: httpx.Response(200, json=envelope)))

        assert result == envelope

    def test_agent_reported_failure(self):
        """Test that success=false raises with the agent's error."""
        envelope = {"success": False, "error": "Agent quota exhausted"}

        with pytest.raises(TransportError) as exc_info:
            _send(_client(lambda request: httpx.Response(200, json=envelope)))

        assert exc_info.value.message == "Agent quota exhausted"
        assert exc_info.value.detail == "agent reported failure"

    def test_agent_reported_failure_without_error(self):
        """Test that success=false without a message leaves message unset."""
        with pytest.raises(TransportError) as exc_info:
            _send(_client(lambda request: httpx.Response(200, json={"success": False})))

        assert exc_info.value.message is None

    def test_http_error_status_with_body(self):
        """Test that an HTTP error carries the body's error text."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": "Too many requests"})

        with pytest.raises(TransportError) as exc_info:
            _send(_client(handler))

        assert exc_info.value.message == "Too many requests"
        assert exc_info.value.status_code == 429

    def test_http_error_status_without_body(self):
        """Test that an HTTP error without a JSON body gets a generic message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(TransportError) as exc_info:
            _send(_client(handler))

        assert exc_info.value.message == "Agent returned HTTP 502"
        assert exc_info.value.status_code == 502

    def test_non_json_body(self):
        """Test that a 200 with a non-JSON body is a transport error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(TransportError) as exc_info:
            _send(_client(handler))

        assert exc_info.value.message == "Agent returned a malformed response."

    def test_network_error(self):
        """Test that connection failures become TransportError without a message."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            _send(_client(handler))

        assert exc_info.value.message is None
        assert "ConnectError" in exc_info.value.detail
        assert str(exc_info.value) == exc_info.value.detail


class TestLifecycle:
    """Tests for client creation and cleanup."""

    def test_defaults_from_settings(self):
        """Test that unset options come from settings."""
        from core.config import settings

        client = ComplianceAgentClient()

        assert client.base_url == settings.agent_base_url.rstrip("/")
        assert client.agent_id == settings.agent_id
        assert client.timeout == settings.agent_timeout_seconds

    def test_aclose_releases_client(self):
        """Test that aclose drops the underlying httpx client."""
        client = _client(lambda request: httpx.Response(200, json={"success": True}))

        async def run():
            await client.send("Hello", "sess_1")
            assert client._client is not None
            await client.aclose()
            assert client._client is None
            await client.aclose()

        asyncio.run(run())

    def test_transport_error_str(self):
        """Test the string form of TransportError."""
        assert str(TransportError("visible")) == "visible"
        assert str(TransportError(detail="low-level")) == "low-level"
        assert str(TransportError()) == "agent call failed"
