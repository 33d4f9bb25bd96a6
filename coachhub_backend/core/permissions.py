# permissions.py
# Club membership lookups and role checks shared by the routers.

import uuid
from typing import Optional, Iterable
from fastapi import HTTPException
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.models.club_model import Membership, ClubRole
from coachhub_backend.models.team_model import Team
from coachhub_backend.models.fixture_model import Fixture


def get_membership(session: Session, club_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Membership]:
    return session.exec(
        select(Membership).where(
            Membership.club_id == club_id,
            Membership.user_id == user_id,
        )
    ).first()


def require_club_member(session: Session, club_id: uuid.UUID, user_id: uuid.UUID, detail: str = "You are not a member of this club") -> Membership:
    membership = get_membership(session, club_id, user_id)
    if not membership:
        logger.warning("User {} is not a member of club {}", user_id, club_id)
        raise HTTPException(status_code=403, detail=detail)
    return membership


def require_club_role(
    session: Session,
    club_id: uuid.UUID,
    user_id: uuid.UUID,
    roles: Iterable[ClubRole],
    detail: str,
) -> Membership:
    """403 unless the user holds one of `roles` in the club."""
    roles = tuple(roles)
    membership = get_membership(session, club_id, user_id)
    if not membership or membership.role not in roles:
        logger.warning("User {} lacks role {} in club {}", user_id, [r.value for r in roles], club_id)
        raise HTTPException(status_code=403, detail=detail)
    return membership


def get_team_or_404(session: Session, team_id: uuid.UUID) -> Team:
    team = session.get(Team, team_id)
    if not team:
        logger.warning("Team {} not found", team_id)
        raise HTTPException(status_code=404, detail="Team not found")
    return team


def get_fixture_or_404(session: Session, fixture_id: uuid.UUID) -> Fixture:
    fixture = session.get(Fixture, fixture_id)
    if not fixture:
        logger.warning("Fixture {} not found", fixture_id)
        raise HTTPException(status_code=404, detail="Fixture not found")
    return fixture


def club_id_for_fixture(session: Session, fixture: Fixture) -> uuid.UUID:
    team = get_team_or_404(session, fixture.team_id)
    return team.club_id
