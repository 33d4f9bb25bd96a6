# coachhub_backend/routes/development_note_routes.py
# API routes for coach notes on player development

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import require_club_member, require_club_role, get_team_or_404
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import MANAGER_ROLES
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.development_note_model import (
    DevelopmentNote, DevelopmentNoteCreate, DevelopmentNoteUpdate,
)

router = APIRouter()


def player_and_club_id(session: Session, player_id):
    player = session.get(Player, player_id)
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    return player, get_team_or_404(session, player.team_id).club_id


@router.get("/development-notes")
def list_development_notes(
    player_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    player, club_id = player_and_club_id(session, parse_uuid(player_id, "player_id"))
    require_club_member(session, club_id, current_user.id)
    return session.exec(
        select(DevelopmentNote)
        .where(DevelopmentNote.player_id == player.id)
        .order_by(DevelopmentNote.created_at.desc())
    ).all()


@router.post("/development-notes")
def create_development_note(
    data: DevelopmentNoteCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    player, club_id = player_and_club_id(session, parse_uuid(data.player_id, "player_id"))
    require_club_role(
        session, club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can write development notes",
    )

    note = DevelopmentNote(
        **data.model_dump(exclude={"player_id"}),
        player_id=player.id,
        created_by=current_user.id,
    )
    session.add(note)
    session.commit()
    session.refresh(note)

    logger.info("Development note {} added for player {}", note.id, player.id)
    return note


@router.put("/development-notes/{note_id}")
def update_development_note(
    note_id: str,
    data: DevelopmentNoteUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    note = session.get(DevelopmentNote, parse_uuid(note_id, "note_id"))
    if not note:
        raise HTTPException(status_code=404, detail="Development note not found")

    _, club_id = player_and_club_id(session, note.player_id)
    require_club_role(
        session, club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can edit development notes",
    )

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(note, field, value)

    session.add(note)
    session.commit()
    session.refresh(note)
    return note
