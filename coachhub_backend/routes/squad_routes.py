# coachhub_backend/routes/squad_routes.py
# API routes for match squads: the HOME/AWAY starting 15 + bench of a fixture

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.database import get_session
from coachhub_backend.core.auth import get_current_user
from coachhub_backend.core.validation import parse_uuid
from coachhub_backend.core.permissions import (
    require_club_member, require_club_role, get_fixture_or_404, club_id_for_fixture,
)
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import MANAGER_ROLES, TRACKER_ROLES
from coachhub_backend.models.fixture_model import Fixture
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.squad_model import (
    MatchSquad, TeamSide, SlotType, SquadUpsert, SquadUpdate,
    SlotAssignRequest, JerseyUpdateRequest, SubstitutionRequest,
)
from coachhub_backend.services.lineup import (
    LineupError, empty_starting_slots, empty_bench, to_slot_dicts, validate_squad,
    assign_player, clear_slot, set_jersey_number, apply_substitution,
)
from coachhub_backend.services.match_state import get_squads_by_side

router = APIRouter()


# ==========================================
# HELPERS
# ==========================================

def parse_side(value: str) -> TeamSide:
    try:
        return TeamSide(value.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail="side must be HOME or AWAY")


def parse_slot_type(value: str) -> SlotType:
    try:
        return SlotType(value.lower())
    except ValueError:
        raise HTTPException(status_code=400, detail="slot_type must be starting or bench")


def load_fixture_for_edit(session: Session, fixture_id: str, user: User) -> Fixture:
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_role(
        session, club_id_for_fixture(session, fixture), user.id, MANAGER_ROLES,
        "Only club admins and coaches can edit squads",
    )
    return fixture


def get_squad_or_404(session: Session, fixture_id, side: TeamSide) -> MatchSquad:
    squad = session.exec(
        select(MatchSquad).where(MatchSquad.fixture_id == fixture_id, MatchSquad.side == side)
    ).first()
    if not squad:
        raise HTTPException(status_code=404, detail=f"{side.value} squad not found")
    return squad


def ensure_unlocked(squad: MatchSquad) -> None:
    if squad.locked:
        logger.warning("Squad {} ({}) is locked", squad.id, squad.side.value)
        raise HTTPException(status_code=409, detail="Squad is locked because the match has started")


def save_slots(session: Session, squad: MatchSquad, starting, bench) -> MatchSquad:
    # Reassign (not mutate) so the JSON columns are written
    squad.starting_slots = starting
    squad.bench = bench
    squad.updated_at = datetime.utcnow()
    session.add(squad)
    session.commit()
    session.refresh(squad)
    return squad


# ==========================================
# READ / UPSERT
# ==========================================

@router.get("/fixtures/{fixture_id}/squads")
def get_squads(
    fixture_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_member(session, club_id_for_fixture(session, fixture), current_user.id)

    squads = get_squads_by_side(session, fixture.id)
    return {
        "home": squads.get(TeamSide.HOME),
        "away": squads.get(TeamSide.AWAY),
    }


@router.post("/fixtures/{fixture_id}/squads")
def upsert_squad(
    fixture_id: str,
    data: SquadUpsert,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Create or overwrite one side's squad.
    Empty lists fall back to the standard empty layout (15 positions + 15 bench).
    """
    fixture = load_fixture_for_edit(session, fixture_id, current_user)

    try:
        starting = to_slot_dicts(data.starting_slots) or empty_starting_slots()
        bench = to_slot_dicts(data.bench) or empty_bench()
        validate_squad(starting, bench)
    except LineupError as e:
        logger.warning("Fixture {} {} squad rejected: {}", fixture.id, data.side.value, e)
        raise HTTPException(status_code=400, detail=str(e))

    squad = session.exec(
        select(MatchSquad).where(MatchSquad.fixture_id == fixture.id, MatchSquad.side == data.side)
    ).first()

    if squad:
        ensure_unlocked(squad)
        logger.info("Overwriting {} squad for fixture {}", data.side.value, fixture.id)
    else:
        squad = MatchSquad(fixture_id=fixture.id, side=data.side)
        logger.info("Creating {} squad for fixture {}", data.side.value, fixture.id)

    return save_slots(session, squad, starting, bench)


@router.put("/fixtures/{fixture_id}/squads/{side}")
def update_squad(
    fixture_id: str,
    side: str,
    data: SquadUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = load_fixture_for_edit(session, fixture_id, current_user)
    team_side = parse_side(side)
    squad = get_squad_or_404(session, fixture.id, team_side)
    ensure_unlocked(squad)

    try:
        starting = to_slot_dicts(data.starting_slots) if data.starting_slots is not None else squad.starting_slots
        bench = to_slot_dicts(data.bench) if data.bench is not None else squad.bench
        validate_squad(starting, bench)
    except LineupError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Updated {} squad for fixture {}", team_side.value, fixture.id)
    return save_slots(session, squad, list(starting), list(bench))


# ==========================================
# SLOT EDITS
# ==========================================

@router.post("/fixtures/{fixture_id}/squads/{side}/slots")
def assign_slot(
    fixture_id: str,
    side: str,
    data: SlotAssignRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Put one of the team's players into a slot (jersey 1-15 follows starting position)."""
    fixture = load_fixture_for_edit(session, fixture_id, current_user)
    team_side = parse_side(side)
    squad = get_squad_or_404(session, fixture.id, team_side)
    ensure_unlocked(squad)

    player = session.get(Player, parse_uuid(data.player_id, "player_id"))
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    if player.team_id != fixture.team_id:
        raise HTTPException(status_code=400, detail="Player does not belong to this team")

    try:
        starting, bench = assign_player(
            squad.starting_slots, squad.bench, data.slot_type, data.index, str(player.id), player.name,
        )
    except LineupError as e:
        logger.warning("Fixture {}: cannot assign player {}: {}", fixture.id, player.id, e)
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        "Fixture {} {}: player {} -> {} slot {}",
        fixture.id, team_side.value, player.id, data.slot_type.value, data.index,
    )
    return save_slots(session, squad, starting, bench)


@router.delete("/fixtures/{fixture_id}/squads/{side}/slots/{slot_type}/{index}")
def remove_from_slot(
    fixture_id: str,
    side: str,
    slot_type: str,
    index: int,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = load_fixture_for_edit(session, fixture_id, current_user)
    squad = get_squad_or_404(session, fixture.id, parse_side(side))
    ensure_unlocked(squad)

    try:
        starting, bench = clear_slot(squad.starting_slots, squad.bench, parse_slot_type(slot_type), index)
    except LineupError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return save_slots(session, squad, starting, bench)


@router.patch("/fixtures/{fixture_id}/squads/{side}/slots/{slot_type}/{index}")
def update_jersey(
    fixture_id: str,
    side: str,
    slot_type: str,
    index: int,
    data: JerseyUpdateRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = load_fixture_for_edit(session, fixture_id, current_user)
    squad = get_squad_or_404(session, fixture.id, parse_side(side))
    ensure_unlocked(squad)

    try:
        starting, bench = set_jersey_number(
            squad.starting_slots, squad.bench, parse_slot_type(slot_type), index, data.jersey_no,
        )
    except LineupError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return save_slots(session, squad, starting, bench)


# ==========================================
# SUBSTITUTIONS (allowed while locked)
# ==========================================

@router.post("/fixtures/{fixture_id}/squads/{side}/substitute")
def substitute(
    fixture_id: str,
    side: str,
    data: SubstitutionRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    fixture = get_fixture_or_404(session, parse_uuid(fixture_id, "fixture_id"))
    require_club_role(
        session, club_id_for_fixture(session, fixture), current_user.id, TRACKER_ROLES,
        "You do not have permission to make substitutions",
    )
    team_side = parse_side(side)
    squad = get_squad_or_404(session, fixture.id, team_side)

    if data.match_time < 0:
        raise HTTPException(status_code=400, detail="match_time cannot be negative")

    try:
        starting, bench, sub_event = apply_substitution(
            squad.starting_slots, squad.bench,
            str(parse_uuid(data.player_off_id, "player_off_id")),
            str(parse_uuid(data.player_on_id, "player_on_id")),
            data.match_time,
            data.player_off_name, data.player_on_name,
        )
    except LineupError as e:
        logger.warning("Fixture {} {}: substitution rejected: {}", fixture.id, team_side.value, e)
        raise HTTPException(status_code=400, detail=str(e))

    squad.subs_log = list(squad.subs_log or []) + [sub_event]
    logger.info(
        "Fixture {} {}: {} off, {} on at {}s",
        fixture.id, team_side.value, data.player_off_id, data.player_on_id, data.match_time,
    )
    return save_slots(session, squad, starting, bench)
