# coachhub_backend/routes/match_state_routes.py
# API routes for the live match state of a fixture (start, update, complete, summary)

from fastapi import APIRouter, Depends
from sqlmodel import Session
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import (
    require_club_member, require_club_role, get_fixture_or_404, club_id_for_fixture,
)
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import TRACKER_ROLES
from coachhub_backend.models.fixture_model import Fixture
from coachhub_backend.models.match_state_model import MatchStateUpdate, MatchStateRead
from coachhub_backend.services import match_state as match_service

router = APIRouter()


def load_fixture_for_tracking(session: Session, fixture_id: str, user: User) -> Fixture:
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_role(
        session, club_id_for_fixture(session, fixture), user.id, TRACKER_ROLES,
        "You do not have permission to track this match",
    )
    return fixture


@router.get("/fixtures/{fixture_id}/match-state", response_model=MatchStateRead)
def get_match_state(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """The fixture's match state, or a NOT_STARTED default if tracking never began."""
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)

    state = match_service.get_match_state(session, fixture.id)
    if not state:
        return match_service.default_match_state(fixture.id)
    return state


@router.post("/fixtures/{fixture_id}/match-state/start", response_model=MatchStateRead)
def start_match(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = load_fixture_for_tracking(session, fixture_id, current_user)
    logger.info("User {} starting match for fixture {}", current_user.id, fixture.id)

    state, warnings = match_service.start_match(session, fixture)
    result = MatchStateRead.model_validate(state)
    result.warnings = warnings
    return result


@router.put("/fixtures/{fixture_id}/match-state", response_model=MatchStateRead)
def update_match_state(
    fixture_id: str,
    data: MatchStateUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = load_fixture_for_tracking(session, fixture_id, current_user)
    state = match_service.update_match_state(session, fixture.id, data)
    logger.info(
        "Fixture {} state: {} {}-{} v {}-{} clock {}",
        fixture.id, state.status.value, state.home_goals, state.home_points,
        state.away_goals, state.away_points, state.match_clock,
    )
    return state


@router.post("/fixtures/{fixture_id}/match-state/complete", response_model=MatchStateRead)
def complete_match(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = load_fixture_for_tracking(session, fixture_id, current_user)
    return match_service.complete_match(session, fixture.id)


@router.get("/fixtures/{fixture_id}/match-summary")
def match_summary(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)
    return match_service.build_match_summary(session, fixture)
