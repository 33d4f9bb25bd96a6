# coachhub_backend/models/squad_model.py
# Match squads: the 15 starting slots + bench for one side of one fixture.

import uuid
from enum import Enum
from typing import Optional, List, Dict, Any
from datetime import datetime
from sqlmodel import SQLModel, Field, JSON, Column, UniqueConstraint
from pydantic import BaseModel


class TeamSide(str, Enum):
    HOME = "HOME"
    AWAY = "AWAY"


class SlotType(str, Enum):
    STARTING = "starting"
    BENCH = "bench"


class LineupSlot(BaseModel):
    """One numbered position in a squad. Empty slots have no player_id."""
    position_no: int
    position_name: str
    player_id: Optional[str] = None
    player_name: Optional[str] = None
    jersey_no: Optional[str] = None


class SubEvent(BaseModel):
    """A substitution recorded against a squad's subs_log."""
    time: str                  # wall clock, ISO format
    match_time: int            # match clock in seconds
    player_off_id: str
    player_off_name: Optional[str] = None
    player_on_id: str
    player_on_name: Optional[str] = None


class MatchSquad(SQLModel, table=True):
    """
    Selected squad for one side of a fixture.
    Locked when the match starts; only substitutions may change it after that.
    """
    __table_args__ = (UniqueConstraint("fixture_id", "side"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    fixture_id: uuid.UUID = Field(foreign_key="fixture.id", index=True)
    side: TeamSide

    # JSON lists of LineupSlot dicts
    # Example: [{"position_no": 1, "position_name": "GK (Goalkeeper)", "player_id": "...", "jersey_no": "1"}, ...]
    starting_slots: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    bench: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # JSON list of SubEvent dicts
    subs_log: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    locked: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class SquadUpsert(BaseModel):
    """Create or overwrite one side's squad (full replacement)."""
    side: TeamSide
    starting_slots: List[LineupSlot] = []
    bench: List[LineupSlot] = []


class SquadUpdate(BaseModel):
    starting_slots: Optional[List[LineupSlot]] = None
    bench: Optional[List[LineupSlot]] = None


class SlotAssignRequest(BaseModel):
    slot_type: SlotType
    index: int
    player_id: str


class JerseyUpdateRequest(BaseModel):
    jersey_no: Optional[str] = None


class SubstitutionRequest(BaseModel):
    player_off_id: str
    player_on_id: str
    player_off_name: Optional[str] = None
    player_on_name: Optional[str] = None
    match_time: int = 0
