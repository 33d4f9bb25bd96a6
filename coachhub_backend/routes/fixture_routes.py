# coachhub_backend/routes/fixture_routes.py
# API routes for fixtures, fixture stats and the WhatsApp match report

from datetime import datetime
import pytz
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid, parse_optional_uuid
from coachhub_backend.core.permissions import (
    require_club_member, require_club_role, get_team_or_404, get_fixture_or_404, club_id_for_fixture,
)
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import MANAGER_ROLES
from coachhub_backend.models.season_model import Competition
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.fixture_model import Fixture, Lineup, FixtureCreate, FixtureUpdate
from coachhub_backend.models.squad_model import MatchSquad
from coachhub_backend.models.match_state_model import MatchState, MatchEvent
from coachhub_backend.models.availability_model import Availability
from coachhub_backend.services.fixture_stats import fixture_stats, generate_whatsapp_report

router = APIRouter()


def check_competition(session: Session, competition_id):
    if competition_id and not session.get(Competition, competition_id):
        raise HTTPException(status_code=404, detail="Competition not found")


def to_naive_utc(value: datetime) -> datetime:
    """Fixture dates are stored as naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)


# ==========================================
# FIXTURE CRUD
# ==========================================

@router.get("/fixtures")
def list_fixtures(
    team_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """All fixtures for a team, newest first."""
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_member(session, team.club_id, current_user.id)
    return session.exec(
        select(Fixture).where(Fixture.team_id == team.id).order_by(Fixture.date.desc())
    ).all()


@router.post("/fixtures")
def create_fixture(
    data: FixtureCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(data.team_id, "team_id"))
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can create fixtures",
    )

    if not data.opponent or not data.opponent.strip():
        raise HTTPException(status_code=400, detail="Opponent is required")

    competition_id = parse_optional_uuid(data.competition_id, "competition_id")
    check_competition(session, competition_id)

    fixture = Fixture(
        **data.model_dump(exclude={"team_id", "competition_id", "opponent"}),
        team_id=team.id,
        competition_id=competition_id,
        opponent=data.opponent.strip(),
    )
    fixture.date = to_naive_utc(data.date)
    # Home side defaults to our own team's details
    if not fixture.home_team_name:
        fixture.home_team_name = team.name
    if not fixture.home_colours:
        fixture.home_colours = team.colours
    if not fixture.away_team_name:
        fixture.away_team_name = fixture.opponent

    session.add(fixture)
    session.commit()
    session.refresh(fixture)

    logger.info("Fixture {} created: {} vs {} on {}", fixture.id, team.name, fixture.opponent, fixture.date)
    return fixture


@router.get("/fixtures/{fixture_id}")
def get_fixture(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)
    return fixture


@router.put("/fixtures/{fixture_id}")
def update_fixture(
    fixture_id: str,
    data: FixtureUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_role(
        session, club_id_for_fixture(session, fixture), current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can edit fixtures",
    )

    if not data.opponent.strip():
        raise HTTPException(status_code=400, detail="Opponent is required")

    updates = data.model_dump(exclude_unset=True)
    if "competition_id" in updates:
        updates["competition_id"] = parse_optional_uuid(updates["competition_id"], "competition_id")
        check_competition(session, updates["competition_id"])
    updates["opponent"] = data.opponent.strip()
    updates["date"] = to_naive_utc(data.date)

    for field, value in updates.items():
        setattr(fixture, field, value)

    session.add(fixture)
    session.commit()
    session.refresh(fixture)

    logger.info("Fixture {} updated", fixture.id)
    return fixture


@router.delete("/fixtures/{fixture_id}")
def delete_fixture(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete a fixture together with its squads, match state, events, lineups and availability."""
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_role(
        session, club_id_for_fixture(session, fixture), current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can delete fixtures",
    )

    for model in (MatchEvent, MatchState, MatchSquad, Lineup, Availability):
        for row in session.exec(select(model).where(model.fixture_id == fixture.id)).all():
            session.delete(row)

    session.delete(fixture)
    session.commit()

    logger.info("Fixture {} deleted", fixture_id)
    return {"message": "Fixture deleted"}


# ==========================================
# STATS & EXPORT
# ==========================================

@router.get("/fixtures/{fixture_id}/stats")
def get_fixture_stats(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)

    events = session.exec(select(MatchEvent).where(MatchEvent.fixture_id == fixture.id)).all()
    return {"fixture_id": fixture.id, **fixture_stats(events)}


@router.post("/fixtures/{fixture_id}/export/whatsapp", response_class=PlainTextResponse)
def export_whatsapp(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)

    events = session.exec(select(MatchEvent).where(MatchEvent.fixture_id == fixture.id)).all()
    players = session.exec(select(Player).where(Player.team_id == fixture.team_id)).all()

    logger.info("Exporting WhatsApp report for fixture {} ({} events)", fixture.id, len(events))
    return generate_whatsapp_report(fixture, events, players)
