# coachhub_backend/routes/season_routes.py
# API routes for club seasons and the competitions played within them

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from typing import Optional
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import require_club_member, require_club_role, get_team_or_404
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import Club, MANAGER_ROLES
from coachhub_backend.models.season_model import Season, Competition, SeasonCreate, CompetitionCreate

router = APIRouter()


# ==========================================
# SEASONS
# ==========================================

@router.get("/seasons")
def list_seasons(
    club_id: str = Query(...),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    club_uuid = parse_uuid(club_id, "club_id")
    require_club_member(session, club_uuid, current_user.id)
    return session.exec(
        select(Season).where(Season.club_id == club_uuid).order_by(Season.start_date.desc())
    ).all()


@router.post("/seasons")
def create_season(
    data: SeasonCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    club_uuid = parse_uuid(data.club_id, "club_id")
    if not session.get(Club, club_uuid):
        raise HTTPException(status_code=404, detail="Club not found")

    require_club_role(
        session, club_uuid, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can create seasons",
    )

    if data.end_date < data.start_date:
        raise HTTPException(status_code=400, detail="end_date must be on or after start_date")

    # Only one active season per club
    if data.is_active:
        active = session.exec(
            select(Season).where(Season.club_id == club_uuid, Season.is_active == True)  # noqa: E712
        ).all()
        for season in active:
            season.is_active = False
            session.add(season)

    season = Season(**data.model_dump(exclude={"club_id"}), club_id=club_uuid)
    session.add(season)
    session.commit()
    session.refresh(season)

    logger.info("Season {} ({}) created for club {}", season.id, season.name, club_uuid)
    return season


# ==========================================
# COMPETITIONS
# ==========================================

@router.get("/competitions")
def list_competitions(
    season_id: Optional[str] = Query(None),
    team_id: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Competitions for a season, or for the active season of a team's club.
    Returns [] when the club has no active season.
    """
    if season_id:
        season = session.get(Season, parse_uuid(season_id, "season_id"))
        if not season:
            raise HTTPException(status_code=404, detail="Season not found")
        require_club_member(session, season.club_id, current_user.id)
    elif team_id:
        team = get_team_or_404(session, parse_uuid(team_id, "team_id"))
        require_club_member(session, team.club_id, current_user.id)
        season = session.exec(
            select(Season).where(Season.club_id == team.club_id, Season.is_active == True)  # noqa: E712
        ).first()
        if not season:
            return []
    else:
        raise HTTPException(status_code=400, detail="season_id or team_id is required")

    return session.exec(
        select(Competition).where(Competition.season_id == season.id).order_by(Competition.name)
    ).all()


@router.post("/competitions")
def create_competition(
    data: CompetitionCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    season = session.get(Season, parse_uuid(data.season_id, "season_id"))
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")

    require_club_role(
        session, season.club_id, current_user.id, MANAGER_ROLES,
        "Only club admins and coaches can create competitions",
    )

    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Competition name is required")

    competition = Competition(season_id=season.id, name=data.name.strip(), type=data.type)
    session.add(competition)
    session.commit()
    session.refresh(competition)

    logger.info("Competition {} created in season {}", competition.id, season.id)
    return competition
