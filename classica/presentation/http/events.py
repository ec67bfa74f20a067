"""Event concierge endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from classica.application.services import ConciergeService
from classica.presentation.http.dependencies import get_concierge_service
from classica.presentation.http.schemas import CamelModel

router = APIRouter(prefix="/events", tags=["events"])


class BeginnerNotesResponse(CamelModel):
    event_id: UUID
    notes: str


@router.post("/{event_id}/beginner-notes", response_model=BeginnerNotesResponse)
async def beginner_notes(
    event_id: UUID,
    service: ConciergeService = Depends(get_concierge_service),
) -> BeginnerNotesResponse:
    """Generate beginner-friendly listening notes for an event."""
    notes = await service.generate_beginner_notes(event_id)
    return BeginnerNotesResponse(event_id=event_id, notes=notes)
