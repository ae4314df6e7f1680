"""
Coprocessor Agents - Transports to the remote compliance agent.

Available agents:
- ComplianceAgentClient: HTTP client for the hosted compliance agent
"""

from .compliance_agent import AgentTransport, ComplianceAgentClient, TransportError

__all__ = [
    "AgentTransport",
    "ComplianceAgentClient",
    "TransportError",
]
