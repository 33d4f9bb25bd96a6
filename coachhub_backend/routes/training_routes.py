# coachhub_backend/routes/training_routes.py
# API routes for team training sessions and per-player attendance

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from typing import Optional
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import require_club_member, require_club_role, get_team_or_404
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import MANAGER_ROLES
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.training_model import (
    TrainingSession, TrainingAttendance, AttendanceStatus,
    TrainingSessionCreate, TrainingSessionUpdate, AttendanceBatch,
)
from coachhub_backend.routes.fixture_routes import to_naive_utc

router = APIRouter()


def get_training_session_or_404(session: Session, session_id: str) -> TrainingSession:
    training = session.get(TrainingSession, parse_uuid(session_id, "session_id"))
    if not training:
        raise HTTPException(status_code=404, detail="Training session not found")
    return training


def attendance_for(session: Session, training: TrainingSession):
    return session.exec(
        select(TrainingAttendance).where(TrainingAttendance.session_id == training.id)
    ).all()


# ==========================================
# TRAINING SESSIONS
# ==========================================

@router.get("/training-sessions")
def list_training_sessions(
    team_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_member(session, team.club_id, current_user.id)
    return session.exec(
        select(TrainingSession)
        .where(TrainingSession.team_id == team.id)
        .order_by(TrainingSession.date.desc())
    ).all()


@router.post("/training-sessions")
def create_training_session(
    data: TrainingSessionCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(data.team_id, "team_id"))
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can schedule training",
    )

    training = TrainingSession(
        **data.model_dump(exclude={"team_id"}),
        team_id=team.id,
        created_by=current_user.id,
    )
    session.add(training)
    session.commit()
    session.refresh(training)

    logger.info("Training session {} created for team {} on {}", training.id, team.id, training.date)
    return training


@router.get("/training-sessions/{session_id}")
def get_training_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    training = get_training_session_or_404(session, session_id)
    team = get_team_or_404(session, training.team_id)
    require_club_member(session, team.club_id, current_user.id)

    return {**training.model_dump(), "attendance": attendance_for(session, training)}


@router.put("/training-sessions/{session_id}")
def update_training_session(
    session_id: str,
    data: TrainingSessionUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    training = get_training_session_or_404(session, session_id)
    team = get_team_or_404(session, training.team_id)
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can edit training",
    )

    updates = data.model_dump(exclude_unset=True)
    if "date" in updates and updates["date"] is None:
        raise HTTPException(status_code=400, detail="date cannot be empty")

    for field, value in updates.items():
        setattr(training, field, value)

    session.add(training)
    session.commit()
    session.refresh(training)
    return training


# ==========================================
# ATTENDANCE
# ==========================================

@router.get("/attendance")
def list_attendance(
    session_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    training = get_training_session_or_404(session, session_id)
    team = get_team_or_404(session, training.team_id)
    require_club_member(session, team.club_id, current_user.id)
    return attendance_for(session, training)


@router.post("/attendance/batch")
def save_attendance(
    data: AttendanceBatch,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Upsert attendance for many players at once (one row per session + player)."""
    training = get_training_session_or_404(session, data.session_id)
    team = get_team_or_404(session, training.team_id)
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can mark attendance",
    )

    existing = {record.player_id: record for record in attendance_for(session, training)}
    updated = 0

    for item in data.records:
        player_id = parse_uuid(item.player_id, "player_id")
        player = session.get(Player, player_id)
        if not player or player.team_id != team.id:
            raise HTTPException(status_code=400, detail=f"Player {item.player_id} is not on this team")

        record = existing.get(player_id)
        if record:
            record.status = item.status
            record.note = item.note
        else:
            record = TrainingAttendance(
                session_id=training.id, player_id=player_id, status=item.status, note=item.note,
            )
            existing[player_id] = record
        session.add(record)
        updated += 1

    session.commit()

    logger.info("Attendance saved for session {}: {} records", training.id, updated)
    return {"updated": updated}


# ==========================================
# TRAINING REPORTS
# ==========================================

def parse_report_date(value: Optional[str], param_name: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return to_naive_utc(datetime.fromisoformat(value))
    except ValueError:
        logger.warning("Invalid {} date: {}", param_name, value)
        raise HTTPException(status_code=400, detail=f"Invalid {param_name} date format. Use ISO 8601 format")


def team_attendance_rows(session: Session, team_id, date_from, date_to):
    """(attendance, session) pairs for a team's sessions inside the date range."""
    query = (
        select(TrainingAttendance, TrainingSession)
        .join(TrainingSession, TrainingSession.id == TrainingAttendance.session_id)
        .where(TrainingSession.team_id == team_id)
    )
    if date_from:
        query = query.where(TrainingSession.date >= date_from)
    if date_to:
        query = query.where(TrainingSession.date <= date_to)
    return session.exec(query).all()


def empty_counts() -> dict:
    return {status.value.lower(): 0 for status in AttendanceStatus}


@router.get("/teams/{team_id}/training-reports/players")
def team_training_report(
    team_id: str,
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Attendance counts per status for every player on the team, sorted by name."""
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_member(session, team.club_id, current_user.id)
    date_from = parse_report_date(from_, "from")
    date_to = parse_report_date(to, "to")

    players = session.exec(select(Player).where(Player.team_id == team.id).order_by(Player.name)).all()
    report = {
        player.id: {"player_id": player.id, "name": player.name, "counts": empty_counts()}
        for player in players
    }

    for record, _ in team_attendance_rows(session, team.id, date_from, date_to):
        if record.player_id in report:
            report[record.player_id]["counts"][record.status.value.lower()] += 1

    logger.info("Training report for team {}: {} players", team.id, len(report))
    return list(report.values())


@router.get("/teams/{team_id}/training-reports/players/{player_id}")
def player_training_report(
    team_id: str,
    player_id: str,
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """One player's attendance counts plus the sessions behind them, most recent first."""
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_member(session, team.club_id, current_user.id)

    player = session.get(Player, parse_uuid(player_id, "player_id"))
    if not player or player.team_id != team.id:
        raise HTTPException(status_code=404, detail="Player not found in team")

    date_from = parse_report_date(from_, "from")
    date_to = parse_report_date(to, "to")

    counts = empty_counts()
    sessions = []
    for record, training in team_attendance_rows(session, team.id, date_from, date_to):
        if record.player_id != player.id:
            continue
        counts[record.status.value.lower()] += 1
        sessions.append({
            "session_id": training.id,
            "date": training.date,
            "session_title": training.focus or "Training Session",
            "status": record.status,
        })
    sessions.sort(key=lambda s: s["date"], reverse=True)

    logger.info("Training report for player {}: {} sessions", player.id, len(sessions))
    return {"player_id": player.id, "name": player.name, "counts": counts, "sessions": sessions}
