# coachhub_backend/models/player_model.py
import uuid
from enum import Enum
from typing import Optional, List
from datetime import datetime, date
from sqlmodel import SQLModel, Field, Relationship
from pydantic import BaseModel

from coachhub_backend.models.team_model import Team


class PositionGroup(str, Enum):
    GK = "GK"
    BACK = "BACK"
    MID = "MID"
    FWD = "FWD"


class DominantSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Player(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    team_id: uuid.UUID = Field(foreign_key="team.id", index=True)

    name: str
    dob: Optional[date] = None
    positions: Optional[str] = None          # free text, e.g. "FB, CB"
    jersey_no: Optional[int] = None
    dominant_side: Optional[DominantSide] = None

    # Depth chart: players are ordered within their position group
    primary_position_group: Optional[PositionGroup] = Field(default=None, index=True)
    depth_order: int = Field(default=0)
    notes: Optional[str] = None

    # Injury tracking
    injury_status: Optional[str] = None
    is_injured: bool = Field(default=False, index=True)
    injury_note: Optional[str] = None
    injury_updated_at: Optional[datetime] = None
    injured_at: Optional[datetime] = None
    cleared_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)

    team: Optional[Team] = Relationship(back_populates="players")


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class PlayerCreate(BaseModel):
    team_id: str
    name: str
    dob: Optional[date] = None
    positions: Optional[str] = None
    jersey_no: Optional[int] = None
    dominant_side: Optional[DominantSide] = None
    primary_position_group: Optional[PositionGroup] = None
    depth_order: Optional[int] = None
    notes: Optional[str] = None
    injury_status: Optional[str] = None
    is_injured: bool = False
    injury_note: Optional[str] = None


class PlayerUpdate(BaseModel):
    """Used by both PUT and PATCH. Only fields present in the body are applied."""
    name: Optional[str] = None
    positions: Optional[str] = None
    jersey_no: Optional[int] = None
    dominant_side: Optional[DominantSide] = None
    primary_position_group: Optional[PositionGroup] = None
    depth_order: Optional[int] = None
    notes: Optional[str] = None
    injury_status: Optional[str] = None
    is_injured: Optional[bool] = None
    injury_note: Optional[str] = None


class QuickAddPlayer(BaseModel):
    """Minimal player creation from the lineup screen."""
    name: str
    jersey_no: Optional[int] = None


class ReorderRequest(BaseModel):
    position_group: PositionGroup
    ordered_player_ids: List[str]
