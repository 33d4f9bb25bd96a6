# coachhub_backend/routes/availability_routes.py
# API routes for player availability ahead of fixtures and training sessions

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from typing import Optional
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid, parse_optional_uuid
from coachhub_backend.core.permissions import require_club_member, get_team_or_404, get_fixture_or_404
from coachhub_backend.models.user_model import User
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.training_model import TrainingSession
from coachhub_backend.models.availability_model import (
    Availability, AvailabilityStatus, AvailabilityCreate, AvailabilityUpdate,
)

router = APIRouter()


def get_training_session_or_404(session: Session, training_session_id) -> TrainingSession:
    training = session.get(TrainingSession, training_session_id)
    if not training:
        raise HTTPException(status_code=404, detail="Training session not found")
    return training


def get_player_or_404(session: Session, player_id) -> Player:
    player = session.get(Player, player_id)
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    return player


def target_team_id(session: Session, fixture_id, training_session_id):
    """Team of the fixture or training session an availability record points at."""
    if fixture_id:
        return get_fixture_or_404(session, fixture_id).team_id
    return get_training_session_or_404(session, training_session_id).team_id


# ==========================================
# AVAILABILITY RECORDS
# ==========================================

@router.get("/availability")
def list_availability(
    player_id: Optional[str] = Query(None),
    fixture_id: Optional[str] = Query(None),
    training_session_id: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Availability filtered by player, fixture and/or training session (at least one)."""
    player_uuid = parse_optional_uuid(player_id, "player_id")
    fixture_uuid = parse_optional_uuid(fixture_id, "fixture_id")
    training_uuid = parse_optional_uuid(training_session_id, "training_session_id")

    if not (player_uuid or fixture_uuid or training_uuid):
        raise HTTPException(
            status_code=400, detail="player_id, fixture_id or training_session_id is required",
        )

    if fixture_uuid or training_uuid:
        team_id = target_team_id(session, fixture_uuid, training_uuid)
    else:
        team_id = get_player_or_404(session, player_uuid).team_id
    require_club_member(session, get_team_or_404(session, team_id).club_id, current_user.id)

    query = select(Availability)
    if player_uuid:
        query = query.where(Availability.player_id == player_uuid)
    if fixture_uuid:
        query = query.where(Availability.fixture_id == fixture_uuid)
    if training_uuid:
        query = query.where(Availability.training_session_id == training_uuid)

    records = session.exec(query.order_by(Availability.created_at)).all()
    logger.info(
        "Fetched {} availability records (player={}, fixture={}, training={})",
        len(records), player_id, fixture_id, training_session_id,
    )
    return records


@router.post("/availability")
def set_availability(
    data: AvailabilityCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Record a player's availability for one fixture or one training session.
    Any club member can respond; a second response for the same event replaces the first.
    """
    player = get_player_or_404(session, parse_uuid(data.player_id, "player_id"))
    fixture_uuid = parse_optional_uuid(data.fixture_id, "fixture_id")
    training_uuid = parse_optional_uuid(data.training_session_id, "training_session_id")

    if bool(fixture_uuid) == bool(training_uuid):
        raise HTTPException(
            status_code=400, detail="Provide exactly one of fixture_id or training_session_id",
        )

    if target_team_id(session, fixture_uuid, training_uuid) != player.team_id:
        raise HTTPException(status_code=400, detail="Player does not belong to this team")

    team = get_team_or_404(session, player.team_id)
    require_club_member(session, team.club_id, current_user.id)

    record = session.exec(
        select(Availability).where(
            Availability.player_id == player.id,
            Availability.fixture_id == fixture_uuid,
            Availability.training_session_id == training_uuid,
        )
    ).first()

    if record:
        record.status = data.status
        record.notes = data.notes
        record.updated_at = datetime.utcnow()
    else:
        record = Availability(
            player_id=player.id,
            fixture_id=fixture_uuid,
            training_session_id=training_uuid,
            status=data.status,
            notes=data.notes,
        )

    session.add(record)
    session.commit()
    session.refresh(record)

    logger.info("Player {} marked {} (record {})", player.id, record.status.value, record.id)
    return record


@router.put("/availability/{availability_id}")
def update_availability(
    availability_id: str,
    data: AvailabilityUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    record = session.get(Availability, parse_uuid(availability_id, "availability_id"))
    if not record:
        raise HTTPException(status_code=404, detail="Availability record not found")

    player = get_player_or_404(session, record.player_id)
    require_club_member(session, get_team_or_404(session, player.team_id).club_id, current_user.id)

    updates = data.model_dump(exclude_unset=True)
    if "status" in updates and updates["status"] is None:
        del updates["status"]

    for field, value in updates.items():
        setattr(record, field, value)
    record.updated_at = datetime.utcnow()

    session.add(record)
    session.commit()
    session.refresh(record)

    logger.info("Availability {} updated", record.id)
    return record


# ==========================================
# SQUAD SELECTION VIEW
# ==========================================

@router.get("/fixtures/{fixture_id}/availability")
def fixture_availability(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """The team's players grouped by their answer for this fixture (no_response if none)."""
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    team = get_team_or_404(session, fixture.team_id)
    require_club_member(session, team.club_id, current_user.id)

    players = session.exec(
        select(Player).where(Player.team_id == team.id).order_by(Player.name)
    ).all()
    answers = {
        record.player_id: record.status
        for record in session.exec(select(Availability).where(Availability.fixture_id == fixture.id)).all()
    }

    grouped = {status.value: [] for status in AvailabilityStatus}
    grouped["no_response"] = []
    for player in players:
        status = answers.get(player.id)
        key = status.value if status else "no_response"
        grouped[key].append({"player_id": player.id, "name": player.name, "is_injured": player.is_injured})

    return grouped
