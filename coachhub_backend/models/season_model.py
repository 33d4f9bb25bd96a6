# season_model.py
# Defines Season (a club's playing year) and Competition (league/championship within a season)

import uuid
from enum import Enum
from typing import Optional
from datetime import datetime, date
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


class Season(SQLModel, table=True):
    """
    A club season, e.g. "2024 Summer Season".
    Only one season per club is expected to be active at a time.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    club_id: uuid.UUID = Field(foreign_key="club.id", index=True)
    name: str
    start_date: date
    end_date: date
    is_active: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CompetitionType(str, Enum):
    LEAGUE = "League"
    CHAMPIONSHIP = "Championship"
    SHIELD = "Shield"


class Competition(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    season_id: uuid.UUID = Field(foreign_key="season.id", index=True)
    name: str
    type: CompetitionType
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class SeasonCreate(BaseModel):
    club_id: str
    name: str
    start_date: date
    end_date: date
    is_active: bool = False


class CompetitionCreate(BaseModel):
    season_id: str
    name: str
    type: CompetitionType
