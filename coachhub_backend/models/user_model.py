# user_model.py
# Defines app users (coaches, admins, stats people) and their login sessions.

import uuid
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


class User(SQLModel, table=True):
    """A person who can log in to the app. Club access comes from Membership rows."""
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: Optional[str] = None
    password_hash: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class AuthSession(SQLModel, table=True):
    """
    Bearer token issued on login.
    Expired rows are rejected (and cleaned up) when they are presented.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    token: str = Field(index=True, unique=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    expires_at: datetime
    created_at: datetime = Field(default_factory=datetime.utcnow)


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------

class UserRegister(BaseModel):
    """Request model for registering a new user."""
    email: str
    password: str
    name: Optional[str] = None


class UserLogin(BaseModel):
    """Request model for logging in an existing user."""
    email: str
    password: str


class UserRead(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None

    class Config:
        from_attributes = True
