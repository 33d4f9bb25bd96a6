# match_state_model.py
# Defines MatchState (live score/clock for a fixture) and MatchEvent (things that happen in a match)

import uuid
from enum import Enum
from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field, UniqueConstraint
from pydantic import BaseModel

from coachhub_backend.models.squad_model import TeamSide


class MatchStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class Half(str, Enum):
    H1 = "H1"
    H2 = "H2"


# A goal is worth three points
GOAL_VALUE = 3


class MatchState(SQLModel, table=True):
    """
    The live state of a fixture once tracking begins.
    At most one row per fixture; created lazily on match start.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    fixture_id: uuid.UUID = Field(foreign_key="fixture.id", unique=True, index=True)

    status: MatchStatus = Field(default=MatchStatus.NOT_STARTED)

    # Score counters
    home_goals: int = Field(default=0, ge=0)
    home_points: int = Field(default=0, ge=0)
    away_goals: int = Field(default=0, ge=0)
    away_points: int = Field(default=0, ge=0)

    match_clock: int = Field(default=0, ge=0)   # seconds
    half: Half = Field(default=Half.H1)

    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def home_total(self) -> int:
        return self.home_goals * GOAL_VALUE + self.home_points

    @property
    def away_total(self) -> int:
        return self.away_goals * GOAL_VALUE + self.away_points


class EventCategory(str, Enum):
    SCORING = "Scoring"
    PUCKOUTS = "Puckouts"
    POSSESSION = "Possession"
    DISCIPLINE = "Discipline"
    SUBSTITUTIONS = "Substitutions"


class MatchEvent(SQLModel, table=True):
    """
    A single tracked event (score, wide, puckout, card...).
    client_id lets offline clients re-send without creating duplicates.
    """
    __table_args__ = (UniqueConstraint("fixture_id", "client_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    fixture_id: uuid.UUID = Field(foreign_key="fixture.id", index=True)
    player_id: Optional[uuid.UUID] = Field(default=None, foreign_key="player.id", index=True)
    side: Optional[TeamSide] = None

    timestamp: int = Field(index=True)           # match clock in seconds
    event_type: str                              # e.g. "Goal", "Point", "Wide", "Won Clean"
    event_category: EventCategory
    half: Optional[Half] = None
    outcome: Optional[str] = None
    zone: Optional[str] = None
    notes: Optional[str] = None

    client_id: Optional[str] = Field(default=None, index=True)
    synced: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------

class MatchStateUpdate(BaseModel):
    status: Optional[MatchStatus] = None
    home_goals: Optional[int] = None
    home_points: Optional[int] = None
    away_goals: Optional[int] = None
    away_points: Optional[int] = None
    match_clock: Optional[int] = None
    half: Optional[Half] = None


class MatchStateRead(BaseModel):
    id: Optional[uuid.UUID] = None
    fixture_id: uuid.UUID
    status: MatchStatus
    home_goals: int
    home_points: int
    away_goals: int
    away_points: int
    match_clock: int
    half: Half
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    warnings: List[str] = []

    class Config:
        from_attributes = True


class MatchEventCreate(BaseModel):
    player_id: Optional[str] = None
    side: Optional[TeamSide] = None
    timestamp: int
    event_type: str
    event_category: EventCategory
    half: Optional[Half] = None
    outcome: Optional[str] = None
    zone: Optional[str] = None
    notes: Optional[str] = None
    client_id: Optional[str] = None


class MatchEventBatch(BaseModel):
    fixture_id: str
    events: List[MatchEventCreate]


class MatchEventUpdate(BaseModel):
    player_id: Optional[str] = None
    timestamp: Optional[int] = None
    event_type: Optional[str] = None
    half: Optional[Half] = None
    outcome: Optional[str] = None
    zone: Optional[str] = None
    notes: Optional[str] = None
