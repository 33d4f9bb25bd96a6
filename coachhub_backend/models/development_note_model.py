# development_note_model.py
# Coach notes on a player's development (strengths, targets)

import uuid
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


class DevelopmentNote(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    player_id: uuid.UUID = Field(foreign_key="player.id", index=True)
    strengths: Optional[str] = None
    targets: Optional[str] = None
    coach_notes: Optional[str] = None
    created_by: uuid.UUID = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class DevelopmentNoteCreate(BaseModel):
    player_id: str
    strengths: Optional[str] = None
    targets: Optional[str] = None
    coach_notes: Optional[str] = None


class DevelopmentNoteUpdate(BaseModel):
    strengths: Optional[str] = None
    targets: Optional[str] = None
    coach_notes: Optional[str] = None
