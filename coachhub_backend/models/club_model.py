# club_model.py
# Defines the Club model and club-level Membership (who can see/manage a club).

import uuid
from enum import Enum
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from sqlmodel import SQLModel, Field, Relationship, UniqueConstraint
from pydantic import BaseModel

if TYPE_CHECKING:
    from .team_model import Team


class ClubRole(str, Enum):
    """Club-level permission roles"""
    CLUB_ADMIN = "CLUB_ADMIN"      # Full control, can invite members
    COACH = "COACH"                # Manages teams, fixtures, lineups
    STATS_PERSON = "STATS_PERSON"  # Records match events
    PLAYER = "PLAYER"              # Read-only


# Roles allowed to create/edit teams, fixtures and squads
MANAGER_ROLES = (ClubRole.CLUB_ADMIN, ClubRole.COACH)

# Roles allowed to run the live match tracker (state, events, substitutions)
TRACKER_ROLES = (ClubRole.CLUB_ADMIN, ClubRole.COACH, ClubRole.STATS_PERSON)


class Club(SQLModel, table=True):
    """Top-level organisation. Owns teams, seasons and memberships."""
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    county: Optional[str] = None
    colours: Optional[str] = None
    crest_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None

    created_by: uuid.UUID = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    teams: List["Team"] = Relationship(back_populates="club")


class Membership(SQLModel, table=True):
    """Links a user to a club with a role. One row per (club, user)."""
    __table_args__ = (UniqueConstraint("club_id", "user_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    club_id: uuid.UUID = Field(foreign_key="club.id", index=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    role: ClubRole
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class ClubCreate(BaseModel):
    name: str
    county: Optional[str] = None
    colours: Optional[str] = None
    crest_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class ClubUpdate(BaseModel):
    name: Optional[str] = None
    county: Optional[str] = None
    colours: Optional[str] = None
    crest_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class MembershipInvite(BaseModel):
    """Invite an existing user (by email) into a club."""
    club_id: str
    user_email: str
    role: ClubRole
