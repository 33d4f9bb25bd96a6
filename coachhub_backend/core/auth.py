import secrets
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session, select
from passlib.context import CryptContext
from loguru import logger

from coachhub_backend.core.config import SESSION_TTL_HOURS
from coachhub_backend.core.database import get_session
from coachhub_backend.models.user_model import User, AuthSession, UserRegister, UserLogin, UserRead

router = APIRouter()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def issue_session_token(user: User, session: Session) -> AuthSession:
    """Create a new bearer token for the user (caller commits)."""
    auth_session = AuthSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=datetime.utcnow() + timedelta(hours=SESSION_TTL_HOURS),
    )
    session.add(auth_session)
    return auth_session


# === CURRENT USER DEPENDENCY ===

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """
    Resolve the bearer token to a User.
    401 if the header is missing, the token is unknown, or it has expired.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    auth_session = session.exec(
        select(AuthSession).where(AuthSession.token == credentials.credentials)
    ).first()
    if not auth_session:
        raise HTTPException(status_code=401, detail="Invalid session token")

    if auth_session.expires_at < datetime.utcnow():
        logger.info("Expired session for user {}", auth_session.user_id)
        session.delete(auth_session)
        session.commit()
        raise HTTPException(status_code=401, detail="Session expired")

    user = session.get(User, auth_session.user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid session token")
    return user


# === REGISTER ===

@router.post("/register")
def register_user(data: UserRegister, session: Session = Depends(get_session)):
    email = data.email.strip().lower()
    existing = session.exec(select(User).where(User.email == email)).first()
    if existing:
        raise HTTPException(status_code=400, detail="User already exists")

    if len(data.password) < 8:
        raise HTTPException(status_code=400, detail="Password must be at least 8 characters")

    new_user = User(email=email, name=data.name, password_hash=hash_password(data.password))
    session.add(new_user)
    session.commit()
    session.refresh(new_user)

    logger.info("Registered user {}", new_user.id)
    return {"message": "User registered", "user_id": new_user.id}


# === LOGIN ===

@router.post("/login")
def login_user(data: UserLogin, session: Session = Depends(get_session)):
    email = data.email.strip().lower()
    user = session.exec(select(User).where(User.email == email)).first()
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not verify_password(data.password, user.password_hash):
        logger.warning("Failed login for {}", email)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    auth_session = issue_session_token(user, session)
    session.commit()

    logger.info("User {} logged in", user.id)
    return {
        "message": "Login successful",
        "token": auth_session.token,
        "expires_at": auth_session.expires_at,
        "user": UserRead.model_validate(user),
    }


# === LOGOUT ===

@router.post("/logout")
def logout_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    auth_session = session.exec(
        select(AuthSession).where(AuthSession.token == credentials.credentials)
    ).first()
    if auth_session:
        session.delete(auth_session)
        session.commit()
    return {"message": "Logged out"}


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
