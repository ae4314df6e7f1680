"""
API Dependencies - Shared validation and dependency injection.

Provides session lookup and query mode validation for API endpoints.
"""

from typing import Mapping

from fastapi import Depends, HTTPException, Request

from coprocessor.controller import TurnController
from coprocessor.schemas.modes import QueryModeConfig
from coprocessor.session import SessionRegistry


def get_sessions(request: Request) -> SessionRegistry:
    """FastAPI dependency returning the app's session registry."""
    return request.app.state.sessions


def validate_mode(mode: str, modes: Mapping[str, QueryModeConfig]) -> str:
    """
    Validate that a query mode id is known.

    Args:
        mode: Mode id to validate
        modes: The mode lookup table

    Returns:
        The validated mode id

    Raises:
        HTTPException: If mode is invalid
    """
    if mode not in modes:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid mode '{mode}'. Valid modes: {', '.join(modes)}"
        )
    return mode


def get_controller(
    session_id: str,
    sessions: SessionRegistry = Depends(get_sessions),
) -> TurnController:
    """
    FastAPI dependency that resolves a session id to its controller.

    Usage:
        @router.get("/sessions/{session_id}/turns")
        def list_turns(controller: TurnController = Depends(get_controller)):
            ...
    """
    controller = sessions.get(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return controller
