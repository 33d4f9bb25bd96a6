# fixture_model.py
# Defines the Fixture model (a scheduled game for one of our teams) and named Lineup sheets.

import uuid
from enum import Enum
from typing import Optional, List, Dict, Any
from datetime import datetime
from sqlmodel import SQLModel, Field, JSON, Column
from pydantic import BaseModel


class FixtureStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Fixture(SQLModel, table=True):
    """
    A game for one of the club's teams against an opponent.
    Live tracking for the game lives in MatchSquad / MatchState / MatchEvent.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Foreign keys
    team_id: uuid.UUID = Field(foreign_key="team.id", index=True)
    competition_id: Optional[uuid.UUID] = Field(default=None, foreign_key="competition.id", index=True)

    # Match details
    opponent: str
    venue: Optional[str] = None
    date: datetime = Field(index=True)                      # Throw-in time (UTC)
    status: FixtureStatus = Field(default=FixtureStatus.SCHEDULED, index=True)

    # Display info for both sides (match tracker header)
    home_team_name: Optional[str] = None
    home_crest_url: Optional[str] = None
    home_colours: Optional[str] = None
    away_team_name: Optional[str] = None
    away_crest_url: Optional[str] = None
    away_colours: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)


class Lineup(SQLModel, table=True):
    """
    Named lineup sheet for a fixture (planning, not live).
    The live per-side squads are MatchSquad rows.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    fixture_id: uuid.UUID = Field(foreign_key="fixture.id", index=True)
    name: str

    # Example: [{"player_id": "...", "position": "FB"}, ...]
    starting15: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    # Example: [{"player_id": "...", "order": 1}, ...]
    subs: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    # Example: {"<player_id>": 45}
    minutes_targets: Optional[Dict[str, int]] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class FixtureCreate(BaseModel):
    team_id: str
    competition_id: Optional[str] = None
    opponent: str
    venue: Optional[str] = None
    date: datetime
    status: FixtureStatus = FixtureStatus.SCHEDULED
    home_team_name: Optional[str] = None
    home_crest_url: Optional[str] = None
    home_colours: Optional[str] = None
    away_team_name: Optional[str] = None
    away_crest_url: Optional[str] = None
    away_colours: Optional[str] = None


class FixtureUpdate(BaseModel):
    opponent: str
    date: datetime
    venue: Optional[str] = None
    competition_id: Optional[str] = None
    status: Optional[FixtureStatus] = None
    home_team_name: Optional[str] = None
    home_crest_url: Optional[str] = None
    home_colours: Optional[str] = None
    away_team_name: Optional[str] = None
    away_crest_url: Optional[str] = None
    away_colours: Optional[str] = None


class LineupCreate(BaseModel):
    fixture_id: str
    name: str
    starting15: List[Dict[str, Any]] = []
    subs: List[Dict[str, Any]] = []
    minutes_targets: Optional[Dict[str, int]] = None


class LineupUpdate(BaseModel):
    name: Optional[str] = None
    starting15: Optional[List[Dict[str, Any]]] = None
    subs: Optional[List[Dict[str, Any]]] = None
    minutes_targets: Optional[Dict[str, int]] = None
