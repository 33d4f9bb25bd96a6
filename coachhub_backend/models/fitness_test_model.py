# fitness_test_model.py
# Recorded fitness test results for a player (sprint times, bleep test levels...)

import uuid
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


class FitnessTest(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    player_id: uuid.UUID = Field(foreign_key="player.id", index=True)
    test_type: str                     # e.g. "40m sprint", "Yo-Yo IR1"
    date: datetime = Field(index=True)
    value: Optional[float] = None
    unit: Optional[str] = None         # e.g. "s", "m", "level"
    created_by: uuid.UUID = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class FitnessTestCreate(BaseModel):
    player_id: str
    test_type: str
    date: datetime
    value: Optional[float] = None
    unit: Optional[str] = None
