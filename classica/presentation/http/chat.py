"""Chat API endpoints."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import Field

from classica.application.services import TurnManager
from classica.domain.entities import ChatMode, ConversationTurn
from classica.infrastructure.auth import AuthContext, get_current_user, get_optional_auth
from classica.infrastructure.telemetry import get_logger
from classica.presentation.http.dependencies import get_turn_manager
from classica.presentation.http.schemas import CamelModel

logger = get_logger(__name__)
router = APIRouter(prefix="/chat", tags=["chat"])


# Request/Response models
class TurnPayload(CamelModel):
    """A prior turn supplied by an anonymous client."""

    role: Literal["user", "assistant"]
    content: str


class ChatSendRequest(CamelModel):
    """Request to send one chat message."""

    session_id: UUID | None = None
    event_id: UUID | None = None
    mode: ChatMode
    content: str = Field(..., min_length=1, max_length=4000)
    history: list[TurnPayload] | None = None


class ChatSendResponse(CamelModel):
    session_id: UUID | None
    response: str


class SessionResponse(CamelModel):
    """Chat session summary."""

    id: UUID
    mode: ChatMode
    event_id: UUID | None
    created_at: datetime
    updated_at: datetime


class MessageResponse(CamelModel):
    """A stored turn. ``content`` is the raw text, ``display_text`` is safe to show."""

    id: UUID | None
    role: str
    content: str
    display_text: str
    ticket_event_id: str | None
    created_at: datetime


# Endpoints
@router.post("/send", response_model=ChatSendResponse)
async def send_message(
    request: ChatSendRequest,
    auth: AuthContext | None = Depends(get_optional_auth),
    manager: TurnManager = Depends(get_turn_manager),
) -> ChatSendResponse:
    """Send a message and return the complete assistant reply."""
    history = None
    if request.history is not None:
        history = [ConversationTurn(role=t.role, content=t.content) for t in request.history]

    reply = await manager.send(
        content=request.content,
        mode=request.mode,
        user_id=auth.user_id if auth else None,
        session_id=request.session_id if auth else None,
        event_id=request.event_id,
        history=history,
    )
    return ChatSendResponse(session_id=reply.session_id, response=reply.response)


@router.get("/sessions", response_model=list[SessionResponse])
async def list_sessions(
    auth: AuthContext = Depends(get_current_user),
    manager: TurnManager = Depends(get_turn_manager),
) -> list[SessionResponse]:
    """List the caller's most recent chat sessions."""
    sessions = await manager.list_sessions(auth.user_id)
    return [
        SessionResponse(
            id=s.id,
            mode=s.mode,
            event_id=s.event_id,
            created_at=s.created_at,
            updated_at=s.updated_at,
        )
        for s in sessions
    ]


@router.get("/sessions/{session_id}/messages", response_model=list[MessageResponse])
async def list_messages(
    session_id: UUID,
    auth: AuthContext = Depends(get_current_user),
    manager: TurnManager = Depends(get_turn_manager),
) -> list[MessageResponse]:
    """List a session's messages in order."""
    views = await manager.list_turns(auth.user_id, session_id)
    return [
        MessageResponse(
            id=v.turn.id,
            role=v.turn.role,
            content=v.turn.content,
            display_text=v.display_text,
            ticket_event_id=v.ticket_event_id,
            created_at=v.turn.created_at,
        )
        for v in views
    ]
