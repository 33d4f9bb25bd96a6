# coachhub_backend/routes/club_routes.py
# API routes for clubs and club memberships

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from typing import Optional
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import require_club_member, require_club_role, get_membership
from coachhub_backend.models.user_model import User, UserRead
from coachhub_backend.models.club_model import (
    Club, Membership, ClubRole, ClubCreate, ClubUpdate, MembershipInvite,
)
from coachhub_backend.models.team_model import Team
from coachhub_backend.models.season_model import Season
from coachhub_backend.models.player_model import Player

router = APIRouter()


# ==========================================
# CLUBS
# ==========================================

@router.get("/clubs")
def list_my_clubs(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Clubs the current user belongs to, each tagged with the user's role."""
    rows = session.exec(
        select(Club, Membership)
        .join(Membership, Membership.club_id == Club.id)
        .where(Membership.user_id == current_user.id)
        .order_by(Club.name)
    ).all()

    return [
        {**club.model_dump(), "user_role": membership.role}
        for club, membership in rows
    ]


@router.post("/clubs")
def create_club(
    data: ClubCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Club name is required")

    club = Club(**data.model_dump(), created_by=current_user.id)
    club.name = club.name.strip()
    session.add(club)
    session.flush()

    # Creator becomes the club's first admin
    session.add(Membership(club_id=club.id, user_id=current_user.id, role=ClubRole.CLUB_ADMIN))
    session.commit()
    session.refresh(club)

    logger.info("Club {} created by user {}", club.id, current_user.id)
    return {**club.model_dump(), "user_role": ClubRole.CLUB_ADMIN}


@router.put("/clubs/{club_id}")
def update_club(
    club_id: str,
    data: ClubUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    club_uuid = parse_uuid(club_id, "club_id")
    club = session.get(Club, club_uuid)
    if not club:
        raise HTTPException(status_code=404, detail="Club not found")

    require_club_role(
        session, club.id, current_user.id, [ClubRole.CLUB_ADMIN],
        "Only club admins can update club details",
    )

    updates = data.model_dump(exclude_unset=True)
    if "name" in updates and not (updates["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Club name is required")

    for field, value in updates.items():
        setattr(club, field, value)

    session.add(club)
    session.commit()
    session.refresh(club)

    logger.info("Club {} updated", club.id)
    return club


@router.get("/clubs/{club_id}/dashboard")
def club_dashboard(
    club_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    club_uuid = parse_uuid(club_id, "club_id")
    club = session.get(Club, club_uuid)
    if not club:
        raise HTTPException(status_code=404, detail="Club not found")

    membership = require_club_member(session, club.id, current_user.id)

    teams = session.exec(
        select(Team).where(Team.club_id == club.id, Team.is_archived == False).order_by(Team.name)  # noqa: E712
    ).all()
    seasons = session.exec(
        select(Season).where(Season.club_id == club.id).order_by(Season.start_date.desc())
    ).all()
    members = session.exec(
        select(Membership, User)
        .join(User, User.id == Membership.user_id)
        .where(Membership.club_id == club.id)
    ).all()

    team_ids = [team.id for team in teams]
    player_count = 0
    if team_ids:
        player_count = len(session.exec(select(Player.id).where(Player.team_id.in_(team_ids))).all())

    return {
        "club": club,
        "user_role": membership.role,
        "teams": teams,
        "seasons": seasons,
        "members": [
            {**UserRead.model_validate(user).model_dump(), "role": m.role}
            for m, user in members
        ],
        "counts": {
            "teams": len(teams),
            "players": player_count,
            "members": len(members),
        },
    }


# ==========================================
# MEMBERSHIPS
# ==========================================

@router.get("/memberships")
def list_memberships(
    club_id: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Members of one club (club_id given) or the current user's own memberships."""
    if club_id is None:
        return session.exec(
            select(Membership).where(Membership.user_id == current_user.id)
        ).all()

    club_uuid = parse_uuid(club_id, "club_id")
    require_club_member(session, club_uuid, current_user.id)
    return session.exec(
        select(Membership).where(Membership.club_id == club_uuid)
    ).all()


@router.post("/memberships")
def invite_member(
    data: MembershipInvite,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    club_uuid = parse_uuid(data.club_id, "club_id")
    if not session.get(Club, club_uuid):
        raise HTTPException(status_code=404, detail="Club not found")

    require_club_role(
        session, club_uuid, current_user.id, [ClubRole.CLUB_ADMIN],
        "Only club admins can invite members",
    )

    email = data.user_email.strip().lower()
    invitee = session.exec(select(User).where(User.email == email)).first()
    if not invitee:
        raise HTTPException(status_code=404, detail="User not found")

    if get_membership(session, club_uuid, invitee.id):
        raise HTTPException(status_code=409, detail="User is already a member of this club")

    membership = Membership(club_id=club_uuid, user_id=invitee.id, role=data.role)
    session.add(membership)
    session.commit()
    session.refresh(membership)

    logger.info("User {} added to club {} as {}", invitee.id, club_uuid, data.role.value)
    return membership
