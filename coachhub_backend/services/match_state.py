# coachhub_backend/services/match_state.py
# Match lifecycle: start (squad checks + lock), live updates, completion and summary.

import uuid
from datetime import datetime
from typing import List, Tuple, Dict, Any, Optional

from fastapi import HTTPException
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.config import STARTING_SLOT_COUNT
from coachhub_backend.models.fixture_model import Fixture, FixtureStatus
from coachhub_backend.models.squad_model import MatchSquad, TeamSide
from coachhub_backend.models.match_state_model import (
    MatchState, MatchStatus, Half, MatchStateUpdate, MatchEvent, EventCategory,
)
from coachhub_backend.services.lineup import filled_count


def default_match_state(fixture_id: uuid.UUID) -> Dict[str, Any]:
    """What the tracker shows before a match has ever been started."""
    return {
        "id": None,
        "fixture_id": fixture_id,
        "status": MatchStatus.NOT_STARTED,
        "home_goals": 0,
        "home_points": 0,
        "away_goals": 0,
        "away_points": 0,
        "match_clock": 0,
        "half": Half.H1,
        "started_at": None,
        "completed_at": None,
    }


def get_match_state(session: Session, fixture_id: uuid.UUID) -> Optional[MatchState]:
    return session.exec(
        select(MatchState).where(MatchState.fixture_id == fixture_id)
    ).first()


def get_squads_by_side(session: Session, fixture_id: uuid.UUID) -> Dict[TeamSide, MatchSquad]:
    squads = session.exec(
        select(MatchSquad).where(MatchSquad.fixture_id == fixture_id)
    ).all()
    return {squad.side: squad for squad in squads}


# ==========================================
# START MATCH
# ==========================================

def start_match(session: Session, fixture: Fixture) -> Tuple[MatchState, List[str]]:
    """
    Validate squads and move the fixture's match state to IN_PROGRESS.

    Steps:
    1. Both HOME and AWAY squads must exist (400 otherwise).
    2. Short starting lineups only produce warnings.
    3. Lock both squads.
    4. Get-or-create MatchState, set IN_PROGRESS / started_at / clock 0 / H1.
    All writes go out in a single commit.
    """
    squads = get_squads_by_side(session, fixture.id)

    if len(squads) < 2:
        missing = [side.value for side in TeamSide if side not in squads]
        logger.warning("Fixture {}: cannot start, missing squads {}", fixture.id, missing)
        if not squads:
            raise HTTPException(
                status_code=400,
                detail="Both HOME and AWAY squads must be created before starting match",
            )
        raise HTTPException(
            status_code=400,
            detail=f"Both HOME and AWAY squads required (missing: {', '.join(missing)})",
        )

    match_state = get_match_state(session, fixture.id)
    if match_state and match_state.status in (MatchStatus.IN_PROGRESS, MatchStatus.PAUSED):
        logger.warning("Fixture {}: match already started", fixture.id)
        raise HTTPException(status_code=409, detail="Match has already started")

    # Short lineups are allowed, the coach just gets told about them
    warnings = []
    for side in TeamSide:
        filled = filled_count(squads[side].starting_slots or [])
        if filled < STARTING_SLOT_COUNT:
            warnings.append(f"{side.value} starting lineup has {filled} of {STARTING_SLOT_COUNT} players")
    if warnings:
        logger.warning("Fixture {}: squads incomplete but proceeding: {}", fixture.id, warnings)

    now = datetime.utcnow()
    for squad in squads.values():
        squad.locked = True
        squad.updated_at = now
        session.add(squad)

    if not match_state:
        match_state = MatchState(fixture_id=fixture.id)

    match_state.status = MatchStatus.IN_PROGRESS
    match_state.started_at = now
    match_state.completed_at = None
    match_state.match_clock = 0
    match_state.half = Half.H1
    match_state.updated_at = now
    session.add(match_state)

    fixture.status = FixtureStatus.IN_PROGRESS
    session.add(fixture)

    session.commit()
    session.refresh(match_state)

    logger.debug("Fixture {} squads locked: {}", fixture.id, [s.id for s in squads.values()])

    logger.info("Fixture {}: match started (state {})", fixture.id, match_state.id)
    return match_state, warnings


# ==========================================
# UPDATE / COMPLETE
# ==========================================

def update_match_state(session: Session, fixture_id: uuid.UUID, data: MatchStateUpdate) -> MatchState:
    match_state = get_match_state(session, fixture_id)
    if not match_state:
        logger.warning("Match state not found for fixture {}", fixture_id)
        raise HTTPException(status_code=404, detail="Match state not found")

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in updates.items():
        if field in ("home_goals", "home_points", "away_goals", "away_points", "match_clock") and value < 0:
            raise HTTPException(status_code=400, detail=f"{field} cannot be negative")
        setattr(match_state, field, value)

    match_state.updated_at = datetime.utcnow()
    session.add(match_state)
    session.commit()
    session.refresh(match_state)
    return match_state


def complete_match(session: Session, fixture_id: uuid.UUID) -> MatchState:
    match_state = get_match_state(session, fixture_id)
    if not match_state:
        logger.warning("Match state not found for fixture {}", fixture_id)
        raise HTTPException(status_code=404, detail="Match state not found")

    now = datetime.utcnow()
    match_state.status = MatchStatus.COMPLETED
    match_state.completed_at = now
    match_state.updated_at = now
    session.add(match_state)

    fixture = session.get(Fixture, fixture_id)
    if fixture:
        fixture.status = FixtureStatus.COMPLETED
        session.add(fixture)

    session.commit()
    session.refresh(match_state)

    logger.info(
        "Fixture {}: match completed {} - {}",
        fixture_id, match_state.home_total, match_state.away_total,
    )
    return match_state


# ==========================================
# SUMMARY
# ==========================================

def aggregate_side_stats(events: List[MatchEvent]) -> Dict[str, Dict[str, int]]:
    """Per-side goals/points/wides and event counts. Events without a side are ignored."""
    stats = {
        "home": {"goals": 0, "points": 0, "wides": 0, "events": 0},
        "away": {"goals": 0, "points": 0, "wides": 0, "events": 0},
    }
    for event in events:
        if event.side is None:
            continue
        side_stats = stats["home"] if event.side == TeamSide.HOME else stats["away"]
        if event.event_category == EventCategory.SCORING:
            if event.event_type == "Goal":
                side_stats["goals"] += 1
            elif event.event_type == "Point":
                side_stats["points"] += 1
            elif event.event_type == "Wide":
                side_stats["wides"] += 1
        side_stats["events"] += 1
    return stats


def build_match_summary(session: Session, fixture: Fixture) -> Dict[str, Any]:
    match_state = get_match_state(session, fixture.id)
    squads = get_squads_by_side(session, fixture.id)
    events = session.exec(
        select(MatchEvent).where(MatchEvent.fixture_id == fixture.id)
    ).all()

    return {
        "fixture": {
            "id": fixture.id,
            "opponent": fixture.opponent,
            "date": fixture.date,
            "venue": fixture.venue,
        },
        "match_state": match_state or default_match_state(fixture.id),
        "home_squad": squads.get(TeamSide.HOME),
        "away_squad": squads.get(TeamSide.AWAY),
        "team_stats": aggregate_side_stats(events),
        "event_count": len(events),
    }
