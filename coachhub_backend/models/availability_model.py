# availability_model.py
# Player availability for an upcoming fixture or training session

import uuid
from enum import Enum
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    MAYBE = "maybe"


class Availability(SQLModel, table=True):
    """
    One player's answer for one fixture or one training session.
    Exactly one of fixture_id / training_session_id is set.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    player_id: uuid.UUID = Field(foreign_key="player.id", index=True)
    fixture_id: Optional[uuid.UUID] = Field(default=None, foreign_key="fixture.id", index=True)
    training_session_id: Optional[uuid.UUID] = Field(default=None, foreign_key="trainingsession.id", index=True)
    status: AvailabilityStatus
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class AvailabilityCreate(BaseModel):
    player_id: str
    fixture_id: Optional[str] = None
    training_session_id: Optional[str] = None
    status: AvailabilityStatus
    notes: Optional[str] = None


class AvailabilityUpdate(BaseModel):
    status: Optional[AvailabilityStatus] = None
    notes: Optional[str] = None
