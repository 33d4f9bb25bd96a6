# coachhub_backend/routes/player_routes.py
# API routes for a team's players: roster, depth chart ordering and injuries

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select, func
from typing import Optional
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import require_club_member, require_club_role, get_team_or_404
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import MANAGER_ROLES
from coachhub_backend.models.player_model import (
    Player, PositionGroup, PlayerCreate, PlayerUpdate, QuickAddPlayer, ReorderRequest,
)
from coachhub_backend.models.training_model import TrainingAttendance, AttendanceStatus
from coachhub_backend.models.development_note_model import DevelopmentNote
from coachhub_backend.models.match_state_model import MatchEvent
from coachhub_backend.models.availability_model import Availability
from coachhub_backend.models.fitness_test_model import FitnessTest

router = APIRouter()


def get_player_or_404(session: Session, player_id: str) -> Player:
    player = session.get(Player, parse_uuid(player_id, "player_id"))
    if not player:
        logger.warning("Player {} not found", player_id)
        raise HTTPException(status_code=404, detail="Player not found")
    return player


def next_depth_order(session: Session, team_id, position_group: Optional[PositionGroup]) -> int:
    """Next free depth slot at the bottom of a position group."""
    current_max = session.exec(
        select(func.max(Player.depth_order)).where(
            Player.team_id == team_id,
            Player.primary_position_group == position_group,
        )
    ).one()
    return 0 if current_max is None else current_max + 1


def apply_player_update(player: Player, data: PlayerUpdate, stamp_injury_dates: bool) -> None:
    """
    Copy the fields present in the body onto the player.
    Any change to is_injured stamps injury_updated_at; PATCH also records
    injured_at / cleared_at for the injury history.
    """
    updates = data.model_dump(exclude_unset=True)
    now = datetime.utcnow()

    if "name" in updates and not (updates["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Player name is required")
    # Non-nullable columns: an explicit null means "leave as is"
    for key in ("depth_order", "is_injured"):
        if key in updates and updates[key] is None:
            del updates[key]

    for field, value in updates.items():
        setattr(player, field, value)

    if "is_injured" in updates:
        player.injury_updated_at = now
        if stamp_injury_dates:
            if updates["is_injured"]:
                player.injured_at = now
                player.cleared_at = None
            else:
                player.cleared_at = now


# ==========================================
# ROSTER
# ==========================================

@router.get("/players")
def list_players(
    team_id: str = Query(...),
    position_group: Optional[PositionGroup] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Team roster: fit players first, then depth order, then name."""
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_member(session, team.club_id, current_user.id)

    query = select(Player).where(Player.team_id == team.id)
    if position_group:
        query = query.where(Player.primary_position_group == position_group)

    players = session.exec(
        query.order_by(Player.is_injured, Player.depth_order, Player.name)
    ).all()
    logger.info("Fetched {} players for team {}", len(players), team.id)
    return players


@router.post("/players")
def create_player(
    data: PlayerCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(data.team_id, "team_id"))
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can add players",
    )

    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Player name is required")

    depth_order = data.depth_order
    if depth_order is None:
        depth_order = next_depth_order(session, team.id, data.primary_position_group)

    player = Player(
        **data.model_dump(exclude={"team_id", "depth_order", "name"}),
        team_id=team.id,
        name=data.name.strip(),
        depth_order=depth_order,
    )
    if player.is_injured:
        player.injury_updated_at = datetime.utcnow()
        player.injured_at = player.injury_updated_at

    session.add(player)
    session.commit()
    session.refresh(player)

    logger.info("Player {} ({}) added to team {} at depth {}", player.id, player.name, team.id, depth_order)
    return player


@router.post("/teams/{team_id}/players/quick-add")
def quick_add_player(
    team_id: str,
    data: QuickAddPlayer,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Add a player from the lineup screen with just a name (and optional number)."""
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can add players",
    )

    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Player name is required")

    player = Player(
        team_id=team.id,
        name=data.name.strip(),
        jersey_no=data.jersey_no,
        depth_order=next_depth_order(session, team.id, None),
    )
    session.add(player)
    session.commit()
    session.refresh(player)

    logger.info("Quick-added player {} to team {}", player.id, team.id)
    return player


@router.get("/players/{player_id}")
def get_player(
    player_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    player = get_player_or_404(session, player_id)
    team = get_team_or_404(session, player.team_id)
    require_club_member(session, team.club_id, current_user.id)

    records = session.exec(
        select(TrainingAttendance).where(TrainingAttendance.player_id == player.id)
    ).all()
    trained = sum(1 for r in records if r.status == AttendanceStatus.TRAINED)
    percentage = (trained / len(records)) * 100 if records else 0.0

    notes = session.exec(
        select(DevelopmentNote)
        .where(DevelopmentNote.player_id == player.id)
        .order_by(DevelopmentNote.created_at.desc())
    ).all()

    return {
        **player.model_dump(),
        "training_attendance_percentage": percentage,
        "training_attendance": records,
        "development_notes": notes,
    }


@router.put("/players/{player_id}")
def update_player(
    player_id: str,
    data: PlayerUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    player = get_player_or_404(session, player_id)
    team = get_team_or_404(session, player.team_id)
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can edit players",
    )

    apply_player_update(player, data, stamp_injury_dates=False)
    session.add(player)
    session.commit()
    session.refresh(player)

    logger.info("Player {} updated", player.id)
    return player


@router.patch("/players/{player_id}")
def patch_player(
    player_id: str,
    data: PlayerUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    player = get_player_or_404(session, player_id)
    team = get_team_or_404(session, player.team_id)
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can edit players",
    )

    apply_player_update(player, data, stamp_injury_dates=True)
    session.add(player)
    session.commit()
    session.refresh(player)

    logger.info("Player {} patched (injured={})", player.id, player.is_injured)
    return player


@router.delete("/players/{player_id}")
def delete_player(
    player_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    player = get_player_or_404(session, player_id)
    team = get_team_or_404(session, player.team_id)
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can delete players",
    )

    for record in session.exec(select(TrainingAttendance).where(TrainingAttendance.player_id == player.id)).all():
        session.delete(record)
    for model in (DevelopmentNote, Availability, FitnessTest):
        for row in session.exec(select(model).where(model.player_id == player.id)).all():
            session.delete(row)
    # Match events stay in the record, just without the player link
    for event in session.exec(select(MatchEvent).where(MatchEvent.player_id == player.id)).all():
        event.player_id = None
        session.add(event)

    session.delete(player)
    session.commit()

    logger.info("Player {} deleted from team {}", player_id, team.id)
    return {"message": "Player deleted"}


# ==========================================
# DEPTH CHART
# ==========================================

@router.put("/teams/{team_id}/players/reorder")
def reorder_players(
    team_id: str,
    data: ReorderRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Set depth order for one position group.
    Every id must be a player of this team in that group; list order becomes depth order.
    """
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can reorder players",
    )

    if not data.ordered_player_ids:
        raise HTTPException(status_code=400, detail="ordered_player_ids is required and cannot be empty")

    ids = [parse_uuid(pid, "player_id") for pid in data.ordered_player_ids]
    players = {p.id: p for p in session.exec(select(Player).where(Player.id.in_(ids))).all()}

    if len(players) != len(set(ids)):
        raise HTTPException(status_code=404, detail="One or more players not found")
    if any(p.team_id != team.id for p in players.values()):
        raise HTTPException(status_code=400, detail="All players must belong to the specified team")
    if any(p.primary_position_group != data.position_group for p in players.values()):
        raise HTTPException(
            status_code=400,
            detail=f"All players must have primary_position_group '{data.position_group.value}'",
        )

    for depth, pid in enumerate(ids):
        players[pid].depth_order = depth
        session.add(players[pid])
    session.commit()

    reordered = []
    for pid in ids:
        session.refresh(players[pid])
        reordered.append(players[pid])

    logger.info("Reordered {} {} players for team {}", len(ids), data.position_group.value, team.id)
    return reordered
