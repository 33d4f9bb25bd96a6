# coachhub_backend/routes/fitness_test_routes.py
# API routes for player fitness test results

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import require_club_member, require_club_role
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import MANAGER_ROLES
from coachhub_backend.models.fitness_test_model import FitnessTest, FitnessTestCreate
from coachhub_backend.routes.development_note_routes import player_and_club_id
from coachhub_backend.routes.fixture_routes import to_naive_utc

router = APIRouter()


@router.get("/fitness-tests")
def list_fitness_tests(
    player_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """A player's fitness results, most recent first."""
    player, club_id = player_and_club_id(session, parse_uuid(player_id, "player_id"))
    require_club_member(session, club_id, current_user.id)

    tests = session.exec(
        select(FitnessTest)
        .where(FitnessTest.player_id == player.id)
        .order_by(FitnessTest.date.desc())
    ).all()
    logger.info("Fetched {} fitness tests for player {}", len(tests), player.id)
    return tests


@router.post("/fitness-tests")
def create_fitness_test(
    data: FitnessTestCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    player, club_id = player_and_club_id(session, parse_uuid(data.player_id, "player_id"))
    require_club_role(
        session, club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can record fitness tests",
    )

    if not data.test_type or not data.test_type.strip():
        raise HTTPException(status_code=400, detail="test_type is required")

    test = FitnessTest(
        player_id=player.id,
        test_type=data.test_type.strip(),
        date=to_naive_utc(data.date),
        value=data.value,
        unit=data.unit,
        created_by=current_user.id,
    )
    session.add(test)
    session.commit()
    session.refresh(test)

    logger.info("Fitness test {} ({}) recorded for player {}", test.id, test.test_type, player.id)
    return test
