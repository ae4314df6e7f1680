"""
Chat API Router.

Endpoints for driving compliance conversations:
- one TurnController per session, held in process memory
- handlers are async so every controller access runs on the event loop
- at most one agent call in flight per session
- failed turns are retried explicitly, never automatically
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from coprocessor.controller import TurnController
from coprocessor.schemas.turn import ChatTurn
from coprocessor.session import SessionRegistry
from core.api.dependencies import get_controller, get_sessions, validate_mode
from core.schemas.chat import (
    ModeListResponse,
    SampleRequest,
    SessionCreate,
    SessionResponse,
    SubmitResponse,
    TurnCreate,
    TurnListResponse,
)
from packs.compliance import SAMPLE_MODE_ID, SAMPLE_QUERY, SAMPLE_RESPONSE, STARTER_QUERIES

router = APIRouter(tags=["chat"])


def _session_to_response(controller: TurnController) -> SessionResponse:
    return SessionResponse(
        session_id=controller.session_id,
        mode=controller.mode,
        busy=controller.is_busy,
        turns=controller.turns,
    )


@router.get("/modes", response_model=ModeListResponse)
async def list_modes(sessions: SessionRegistry = Depends(get_sessions)):
    """List query modes in display order, with starter queries."""
    modes = list(sessions.modes.values())
    return ModeListResponse(
        items=modes,
        default_mode=sessions.default_mode or modes[0].mode_id,
        starter_queries=STARTER_QUERIES,
    )


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session(
    request: SessionCreate,
    sessions: SessionRegistry = Depends(get_sessions),
):
    """Start a new conversation with a fresh session id."""
    if request.mode is not None:
        validate_mode(request.mode, sessions.modes)
    controller = sessions.create(mode=request.mode)
    return _session_to_response(controller)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(controller: TurnController = Depends(get_controller)):
    """Get a conversation with its turns."""
    return _session_to_response(controller)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(
    controller: TurnController = Depends(get_controller),
    sessions: SessionRegistry = Depends(get_sessions),
):
    """
    End a conversation and discard its turns.

    Refused with 409 while a turn is pending.
    """
    if sessions.remove(controller.session_id) is None:
        raise HTTPException(
            status_code=409,
            detail="Session has a turn in flight; retry once it settles"
        )
    return Response(status_code=204)


@router.get("/sessions/{session_id}/turns", response_model=TurnListResponse)
async def list_turns(controller: TurnController = Depends(get_controller)):
    """List turns in creation order."""
    turns = controller.turns
    return TurnListResponse(items=turns, total=len(turns), busy=controller.is_busy)


@router.get("/sessions/{session_id}/turns/{turn_id}", response_model=ChatTurn)
async def get_turn(turn_id: str, controller: TurnController = Depends(get_controller)):
    """Get a specific turn."""
    turn = controller.get_turn(turn_id)
    if turn is None:
        raise HTTPException(status_code=404, detail=f"Turn not found: {turn_id}")
    return turn


@router.post("/sessions/{session_id}/turns", response_model=SubmitResponse)
async def submit_turn(
    request: TurnCreate,
    wait: bool = Query(False, description="Wait for the agent call to settle"),
    controller: TurnController = Depends(get_controller),
    sessions: SessionRegistry = Depends(get_sessions),
):
    """
    Submit a query.

    The agent call runs in the background unless wait=true. Blank text
    and submissions made while a turn is pending are rejected with
    accepted=false, and leave the session's mode unchanged.
    """
    previous_mode = controller.mode.mode_id
    if request.mode is not None:
        controller.set_mode(validate_mode(request.mode, sessions.modes))

    turn_id = controller.submit(request.text)
    if turn_id is None:
        controller.set_mode(previous_mode)
        reason = "blank" if not request.text.strip() else "in_flight"
        return SubmitResponse(accepted=False, reason=reason)

    if wait:
        await controller.wait_idle()
    return SubmitResponse(accepted=True, turn=controller.get_turn(turn_id))


@router.post("/sessions/{session_id}/turns/{turn_id}/retry", response_model=SubmitResponse)
async def retry_turn(
    turn_id: str,
    wait: bool = Query(False, description="Wait for the agent call to settle"),
    controller: TurnController = Depends(get_controller),
):
    """
    Retry a failed turn.

    The failed turn is removed and its text is re-submitted as a new turn
    at the end of the conversation.
    """
    turn = controller.get_turn(turn_id)
    if turn is None:
        raise HTTPException(status_code=404, detail=f"Turn not found: {turn_id}")

    new_turn_id = controller.retry(turn_id)
    if new_turn_id is None:
        reason = "in_flight" if turn.is_retryable else "not_retryable"
        return SubmitResponse(accepted=False, reason=reason)

    if wait:
        await controller.wait_idle()
    return SubmitResponse(accepted=True, turn=controller.get_turn(new_turn_id))


@router.post("/sessions/{session_id}/sample", response_model=SessionResponse)
async def toggle_sample(
    request: SampleRequest,
    controller: TurnController = Depends(get_controller),
):
    """Show or hide the sample exchange (only shown in an empty conversation)."""
    if request.show:
        controller.load_sample(SAMPLE_RESPONSE, SAMPLE_QUERY, mode_id=SAMPLE_MODE_ID)
    else:
        controller.clear_sample()
    return _session_to_response(controller)
