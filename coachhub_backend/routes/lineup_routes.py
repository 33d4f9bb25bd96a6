# coachhub_backend/routes/lineup_routes.py
# API routes for named lineup sheets (planning lineups, separate from the live match squads)

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import (
    require_club_member, require_club_role, get_fixture_or_404, club_id_for_fixture,
)
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import MANAGER_ROLES
from coachhub_backend.models.fixture_model import Lineup, LineupCreate, LineupUpdate

router = APIRouter()


def get_lineup_for_edit(session: Session, lineup_id: str, user: User) -> Lineup:
    lineup = session.get(Lineup, parse_uuid(lineup_id, "lineup_id"))
    if not lineup:
        raise HTTPException(status_code=404, detail="Lineup not found")

    fixture = get_fixture_or_404(session, lineup.fixture_id)
    require_club_role(
        session, club_id_for_fixture(session, fixture), user.id, MANAGER_ROLES,
        "Only club admins and coaches can edit lineups",
    )
    return lineup


@router.get("/lineups")
def list_lineups(
    fixture_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)
    return session.exec(
        select(Lineup).where(Lineup.fixture_id == fixture.id).order_by(Lineup.created_at)
    ).all()


@router.post("/lineups")
def create_lineup(
    data: LineupCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(data.fixture_id, "fixture_id"))
    require_club_role(
        session, club_id_for_fixture(session, fixture), current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can create lineups",
    )

    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Lineup name is required")

    lineup = Lineup(
        fixture_id=fixture.id,
        name=data.name.strip(),
        starting15=data.starting15,
        subs=data.subs,
        minutes_targets=data.minutes_targets,
    )
    session.add(lineup)
    session.commit()
    session.refresh(lineup)

    logger.info("Lineup {} ({}) created for fixture {}", lineup.id, lineup.name, fixture.id)
    return lineup


@router.put("/lineups/{lineup_id}")
def update_lineup(
    lineup_id: str,
    data: LineupUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    lineup = get_lineup_for_edit(session, lineup_id, current_user)

    updates = data.model_dump(exclude_unset=True)
    if "name" in updates and not (updates["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Lineup name is required")
    for key in ("starting15", "subs"):
        if key in updates and updates[key] is None:
            updates[key] = []

    for field, value in updates.items():
        setattr(lineup, field, value)

    session.add(lineup)
    session.commit()
    session.refresh(lineup)
    return lineup


@router.delete("/lineups/{lineup_id}")
def delete_lineup(
    lineup_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    lineup = get_lineup_for_edit(session, lineup_id, current_user)
    session.delete(lineup)
    session.commit()

    logger.info("Lineup {} deleted", lineup_id)
    return {"message": "Lineup deleted"}
