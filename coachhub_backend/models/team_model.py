# team_model.py
# Defines the Team model (a club's side for one sport/grade) and team-level memberships.

import uuid
from enum import Enum
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from sqlmodel import SQLModel, Field, Relationship, UniqueConstraint
from pydantic import BaseModel

from coachhub_backend.models.club_model import Club

if TYPE_CHECKING:
    from .player_model import Player


class TeamRole(str, Enum):
    COACH = "COACH"
    STATS_PERSON = "STATS_PERSON"
    PLAYER = "PLAYER"


class Team(SQLModel, table=True):
    """
    A team within a club (e.g. "Senior Hurling", "U16 Camogie").
    Archived teams are kept for history but hidden from default listings.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    club_id: uuid.UUID = Field(foreign_key="club.id", index=True)

    name: str
    short_name: Optional[str] = None
    sport: Optional[str] = None          # HURLING, CAMOGIE, GAELIC_FOOTBALL, LADIES_GAELIC_FOOTBALL
    grade: Optional[str] = None
    age_group: Optional[str] = None
    home_venue: Optional[str] = None
    colours: Optional[str] = None
    crest_url: Optional[str] = None

    is_archived: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    club: Optional[Club] = Relationship(back_populates="teams")
    players: List["Player"] = Relationship(back_populates="team")


class TeamMembership(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("team_id", "user_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    team_id: uuid.UUID = Field(foreign_key="team.id", index=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    role: TeamRole
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class TeamCreate(BaseModel):
    club_id: str
    name: str
    short_name: Optional[str] = None
    sport: Optional[str] = None
    grade: Optional[str] = None
    age_group: Optional[str] = None
    home_venue: Optional[str] = None
    colours: Optional[str] = None


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    short_name: Optional[str] = None
    sport: Optional[str] = None
    grade: Optional[str] = None
    age_group: Optional[str] = None
    home_venue: Optional[str] = None
    colours: Optional[str] = None
    is_archived: Optional[bool] = None


class TeamMembershipCreate(BaseModel):
    team_id: str
    user_id: str
    role: TeamRole
