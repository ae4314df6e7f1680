"""
Compliance Hub - FastAPI Application

Main entry point for the compliance conversation API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coprocessor.agents.compliance_agent import AgentTransport, ComplianceAgentClient
from coprocessor.session import SessionRegistry
from core.api import chat
from core.config import settings
from core.logging import setup_logging
from packs.compliance import COMPLIANCE_QUERY_MODES


def create_app(transport: Optional[AgentTransport] = None) -> FastAPI:
    """
    Build the application.

    Args:
        transport: Agent transport shared by all sessions (defaults to an
            HTTP client configured from settings)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        yield
        # Let in-flight agent calls settle before the loop goes away
        await app.state.sessions.aclose()

    app = FastAPI(
        title=settings.app_name,
        description="Conversational compliance analysis over a remote agent",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.sessions = SessionRegistry(
        transport=transport or ComplianceAgentClient(),
        modes=COMPLIANCE_QUERY_MODES,
        default_mode=settings.default_mode,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router, prefix=settings.api_v1_prefix)

    @app.get("/")
    def root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": "0.1.0",
            "status": "operational",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
