# coachhub_backend/routes/match_event_routes.py
# API routes for match events, including offline batch sync from the tracker app

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from typing import Optional
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid, parse_optional_uuid
from coachhub_backend.core.permissions import (
    require_club_member, require_club_role, get_fixture_or_404, club_id_for_fixture,
)
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import TRACKER_ROLES
from coachhub_backend.models.fixture_model import Fixture
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.match_state_model import (
    MatchEvent, MatchEventCreate, MatchEventBatch, MatchEventUpdate,
)

router = APIRouter()


def require_tracker(session: Session, fixture: Fixture, user: User) -> None:
    require_club_role(
        session, club_id_for_fixture(session, fixture), user.id, TRACKER_ROLES,
        "You do not have permission to record match events",
    )


def find_by_client_id(session: Session, fixture_id, client_id: Optional[str]) -> Optional[MatchEvent]:
    if not client_id:
        return None
    return session.exec(
        select(MatchEvent).where(MatchEvent.fixture_id == fixture_id, MatchEvent.client_id == client_id)
    ).first()


def build_event(session: Session, fixture: Fixture, data: MatchEventCreate, synced: bool = False) -> MatchEvent:
    """Validate an incoming event and build the row (caller adds and commits)."""
    if data.timestamp < 0:
        raise HTTPException(status_code=400, detail="timestamp cannot be negative")
    if not data.event_type or not data.event_type.strip():
        raise HTTPException(status_code=400, detail="event_type is required")

    player_id = parse_optional_uuid(data.player_id, "player_id")
    if player_id and not session.get(Player, player_id):
        raise HTTPException(status_code=404, detail="Player not found")

    return MatchEvent(
        **data.model_dump(exclude={"player_id", "event_type"}),
        fixture_id=fixture.id,
        player_id=player_id,
        event_type=data.event_type.strip(),
        synced=synced,
    )


# ==========================================
# PER-FIXTURE EVENTS
# ==========================================

@router.get("/fixtures/{fixture_id}/events")
def list_events(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)
    return session.exec(
        select(MatchEvent)
        .where(MatchEvent.fixture_id == fixture.id)
        .order_by(MatchEvent.timestamp, MatchEvent.created_at)
    ).all()


@router.post("/fixtures/{fixture_id}/events")
def create_event(
    fixture_id: str,
    data: MatchEventCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Record an event. Re-sending the same client_id returns the stored event."""
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_tracker(session, fixture, current_user)

    existing = find_by_client_id(session, fixture.id, data.client_id)
    if existing:
        logger.info("Fixture {}: duplicate event client_id {}", fixture.id, data.client_id)
        return existing

    event = build_event(session, fixture, data)
    session.add(event)
    session.commit()
    session.refresh(event)

    logger.info(
        "Fixture {}: {} {} at {}s",
        fixture.id, event.event_category.value, event.event_type, event.timestamp,
    )
    return event


# ==========================================
# OFFLINE BATCH SYNC
# ==========================================

@router.post("/match-events/batch")
def sync_events(
    data: MatchEventBatch,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Upload events queued while offline.
    Events whose client_id is already stored count as duplicates; events that
    fail validation count as failed and do not stop the rest of the batch.
    """
    fixture = get_fixture_or_404(session, parse_uuid(data.fixture_id, "fixture_id"))
    require_tracker(session, fixture, current_user)

    synced = duplicates = failed = 0
    seen_client_ids = set()

    for item in data.events:
        if item.client_id and (
            item.client_id in seen_client_ids or find_by_client_id(session, fixture.id, item.client_id)
        ):
            duplicates += 1
            continue

        try:
            event = build_event(session, fixture, item, synced=True)
        except HTTPException as e:
            logger.warning("Fixture {}: batch event {} rejected: {}", fixture.id, item.client_id, e.detail)
            failed += 1
            continue

        session.add(event)
        if item.client_id:
            seen_client_ids.add(item.client_id)
        synced += 1

    session.commit()

    logger.info(
        "Fixture {} batch sync: {} synced, {} duplicates, {} failed",
        fixture.id, synced, duplicates, failed,
    )
    return {"synced": synced, "duplicates": duplicates, "failed": failed}


# ==========================================
# EDIT / DELETE
# ==========================================

def get_event_or_404(session: Session, event_id: str) -> MatchEvent:
    event = session.get(MatchEvent, parse_uuid(event_id, "event_id"))
    if not event:
        raise HTTPException(status_code=404, detail="Match event not found")
    return event


@router.put("/match-events/{event_id}")
def update_event(
    event_id: str,
    data: MatchEventUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    event = get_event_or_404(session, event_id)
    require_tracker(session, get_fixture_or_404(session, event.fixture_id), current_user)

    updates = data.model_dump(exclude_unset=True)
    if "player_id" in updates:
        updates["player_id"] = parse_optional_uuid(updates["player_id"], "player_id")
        if updates["player_id"] and not session.get(Player, updates["player_id"]):
            raise HTTPException(status_code=404, detail="Player not found")
    if updates.get("timestamp") is not None and updates["timestamp"] < 0:
        raise HTTPException(status_code=400, detail="timestamp cannot be negative")

    for field, value in updates.items():
        setattr(event, field, value)

    session.add(event)
    session.commit()
    session.refresh(event)

    logger.info("Match event {} updated", event.id)
    return event


@router.delete("/match-events/{event_id}")
def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    event = get_event_or_404(session, event_id)
    require_tracker(session, get_fixture_or_404(session, event.fixture_id), current_user)

    session.delete(event)
    session.commit()

    logger.info("Match event {} deleted", event_id)
    return {"message": "Match event deleted"}
