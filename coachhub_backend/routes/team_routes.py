# coachhub_backend/routes/team_routes.py
# API routes for teams, team memberships and a team's fixture list

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from typing import Optional
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import (
    require_club_member, require_club_role, get_team_or_404,
)
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import Club, Membership, MANAGER_ROLES
from coachhub_backend.models.team_model import (
    Team, TeamMembership, TeamCreate, TeamUpdate, TeamMembershipCreate,
)
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.fixture_model import Fixture

router = APIRouter()

# Free-text sport names the apps send, mapped to the stored codes
SPORT_ALIASES = {
    "hurling": "HURLING",
    "camogie": "CAMOGIE",
    "football": "GAELIC_FOOTBALL",
    "gaelic football": "GAELIC_FOOTBALL",
    "ladies football": "LADIES_GAELIC_FOOTBALL",
    "ladies gaelic football": "LADIES_GAELIC_FOOTBALL",
}
SPORT_CODES = set(SPORT_ALIASES.values())

MAX_FIXTURE_LIMIT = 100


def normalize_sport(sport: Optional[str]) -> Optional[str]:
    """Map a sport name to its code. Unknown sports are stored as None."""
    if not sport:
        return None
    cleaned = sport.strip()
    if cleaned.upper() in SPORT_CODES:
        return cleaned.upper()
    return SPORT_ALIASES.get(cleaned.lower().replace("_", " "))


# ==========================================
# TEAMS
# ==========================================

@router.get("/teams")
def list_teams(
    club_id: Optional[str] = Query(None, alias="clubId"),
    include_archived: bool = Query(False, alias="includeArchived"),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Teams for one club (clubId) or for every club the user belongs to.
    Archived teams are only included with includeArchived=true.
    """
    if club_id is not None:
        club_uuid = parse_uuid(club_id, "clubId")
        require_club_member(session, club_uuid, current_user.id)
        club_ids = [club_uuid]
    else:
        club_ids = session.exec(
            select(Membership.club_id).where(Membership.user_id == current_user.id)
        ).all()
        if not club_ids:
            return []

    query = select(Team).where(Team.club_id.in_(club_ids))
    if not include_archived:
        query = query.where(Team.is_archived == False)  # noqa: E712

    return session.exec(query.order_by(Team.name)).all()


@router.post("/teams")
def create_team(
    data: TeamCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    club_uuid = parse_uuid(data.club_id, "club_id")
    if not session.get(Club, club_uuid):
        raise HTTPException(status_code=404, detail="Club not found")

    require_club_role(
        session, club_uuid, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can create teams",
    )

    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Team name is required")

    team = Team(**data.model_dump(exclude={"club_id"}), club_id=club_uuid)
    team.name = team.name.strip()
    team.sport = normalize_sport(data.sport)
    session.add(team)
    session.commit()
    session.refresh(team)

    logger.info("Team {} ({}) created in club {}", team.id, team.name, club_uuid)
    return team


@router.put("/teams/{team_id}")
def update_team(
    team_id: str,
    data: TeamUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can update teams",
    )

    updates = data.model_dump(exclude_unset=True)
    if "name" in updates and not (updates["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Team name is required")
    if "sport" in updates:
        updates["sport"] = normalize_sport(updates["sport"])

    for field, value in updates.items():
        setattr(team, field, value)

    session.add(team)
    session.commit()
    session.refresh(team)

    if "is_archived" in updates:
        logger.info("Team {} archived={}", team.id, team.is_archived)
    return team


@router.get("/teams/{team_id}/dashboard")
def team_dashboard(
    team_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    membership = require_club_member(session, team.club_id, current_user.id)

    now = datetime.utcnow()
    player_count = len(session.exec(select(Player.id).where(Player.team_id == team.id)).all())
    upcoming = session.exec(
        select(Fixture)
        .where(Fixture.team_id == team.id, Fixture.date >= now)
        .order_by(Fixture.date)
        .limit(5)
    ).all()
    recent = session.exec(
        select(Fixture)
        .where(Fixture.team_id == team.id, Fixture.date < now)
        .order_by(Fixture.date.desc())
        .limit(5)
    ).all()

    return {
        "team": team,
        "player_count": player_count,
        "upcoming_fixtures": upcoming,
        "recent_fixtures": recent,
        "user_role": membership.role,
    }


@router.get("/teams/{team_id}/fixtures")
def team_fixtures(
    team_id: str,
    from_: Optional[str] = Query(None, alias="from"),
    limit: int = Query(5),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Fixtures for a team in date order. from=now (or an ISO datetime) drops earlier games."""
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_member(session, team.club_id, current_user.id)

    if limit < 1:
        raise HTTPException(status_code=400, detail="limit must be at least 1")
    limit = min(limit, MAX_FIXTURE_LIMIT)

    query = select(Fixture).where(Fixture.team_id == team.id)
    if from_:
        if from_ == "now":
            start = datetime.utcnow()
        else:
            try:
                start = datetime.fromisoformat(from_)
            except ValueError:
                raise HTTPException(status_code=400, detail="from must be 'now' or an ISO datetime")
        query = query.where(Fixture.date >= start)

    return session.exec(query.order_by(Fixture.date).limit(limit)).all()


# ==========================================
# TEAM MEMBERSHIPS
# ==========================================

@router.get("/team-memberships")
def list_team_memberships(
    team_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
    require_club_member(session, team.club_id, current_user.id)
    return session.exec(
        select(TeamMembership).where(TeamMembership.team_id == team.id)
    ).all()


@router.post("/team-memberships")
def create_team_membership(
    data: TeamMembershipCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    team = get_team_or_404(session, parse_uuid(data.team_id, "team_id"))
    require_club_role(
        session, team.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can manage team members",
    )

    user_uuid = parse_uuid(data.user_id, "user_id")
    if not session.get(User, user_uuid):
        raise HTTPException(status_code=404, detail="User not found")

    existing = session.exec(
        select(TeamMembership).where(
            TeamMembership.team_id == team.id,
            TeamMembership.user_id == user_uuid,
        )
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="User is already a member of this team")

    membership = TeamMembership(team_id=team.id, user_id=user_uuid, role=data.role)
    session.add(membership)
    session.commit()
    session.refresh(membership)

    logger.info("User {} joined team {} as {}", user_uuid, team.id, data.role.value)
    return membership
