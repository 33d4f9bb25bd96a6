# training_model.py
# Defines training sessions and per-player attendance records

import uuid
from enum import Enum
from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field, UniqueConstraint
from pydantic import BaseModel


class AttendanceStatus(str, Enum):
    TRAINED = "TRAINED"
    INJURED = "INJURED"
    EXCUSED = "EXCUSED"
    NO_CONTACT = "NO_CONTACT"


class TrainingSession(SQLModel, table=True):
    """A scheduled training session for a team."""
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    team_id: uuid.UUID = Field(foreign_key="team.id", index=True)
    date: datetime = Field(index=True)
    location: Optional[str] = None
    focus: Optional[str] = None      # e.g. "Puckouts", "Fitness"
    drills: Optional[str] = None
    notes: Optional[str] = None
    created_by: uuid.UUID = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class TrainingAttendance(SQLModel, table=True):
    """One row per (session, player). Defaults to NO_CONTACT until the coach marks it."""
    __table_args__ = (UniqueConstraint("session_id", "player_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    session_id: uuid.UUID = Field(foreign_key="trainingsession.id", index=True)
    player_id: uuid.UUID = Field(foreign_key="player.id", index=True)
    status: AttendanceStatus = Field(default=AttendanceStatus.NO_CONTACT)
    note: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class TrainingSessionCreate(BaseModel):
    team_id: str
    date: datetime
    location: Optional[str] = None
    focus: Optional[str] = None
    drills: Optional[str] = None
    notes: Optional[str] = None


class TrainingSessionUpdate(BaseModel):
    date: Optional[datetime] = None
    location: Optional[str] = None
    focus: Optional[str] = None
    drills: Optional[str] = None
    notes: Optional[str] = None


class AttendanceRecord(BaseModel):
    player_id: str
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceBatch(BaseModel):
    session_id: str
    records: List[AttendanceRecord]
