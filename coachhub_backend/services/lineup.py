# coachhub_backend/services/lineup.py
# Squad slot rules: default layout, duplicate detection, jersey numbering and substitutions.
#
# Squads are stored as plain JSON lists of slot dicts. Every helper here returns
# NEW lists instead of mutating its inputs, so callers can assign the result
# straight back onto the MatchSquad row (SQLAlchemy only notices reassignment
# of JSON columns, not in-place edits).

import uuid
from datetime import datetime
from typing import List, Dict, Any, Optional, Tuple, Iterable

from coachhub_backend.core.config import STARTING_SLOT_COUNT, BENCH_SLOT_COUNT
from coachhub_backend.models.squad_model import LineupSlot, SlotType

# ==========================================
# DEFAULT GAELIC GAMES POSITIONS (1-15)
# ==========================================
DEFAULT_POSITIONS = [
    (1, "GK (Goalkeeper)"),
    (2, "RCB (R Corner Back)"),
    (3, "FB (Full Back)"),
    (4, "LCB (L Corner Back)"),
    (5, "RHB (R Half Back)"),
    (6, "CB (Centre Back)"),
    (7, "LHB (L Half Back)"),
    (8, "MF (Midfield)"),
    (9, "MF (Midfield)"),
    (10, "RHF (R Half Forward)"),
    (11, "CF (Centre Forward)"),
    (12, "LHF (L Half Forward)"),
    (13, "RCF (R Corner Forward)"),
    (14, "FF (Full Forward)"),
    (15, "LCF (L Corner Forward)"),
]

Slot = Dict[str, Any]


class LineupError(ValueError):
    """Raised when a squad edit breaks a lineup rule (duplicate player, bad slot...)."""


# ==========================================
# LAYOUT HELPERS
# ==========================================

def empty_slot(position_no: int, position_name: str) -> Slot:
    return LineupSlot(position_no=position_no, position_name=position_name).model_dump()


def empty_starting_slots() -> List[Slot]:
    return [empty_slot(no, name) for no, name in DEFAULT_POSITIONS]


def empty_bench() -> List[Slot]:
    # Bench positions continue numbering after the starting 15
    return [
        empty_slot(STARTING_SLOT_COUNT + i + 1, f"Bench {i + 1}")
        for i in range(BENCH_SLOT_COUNT)
    ]


def normalise_player_id(player_id: Optional[str]) -> Optional[str]:
    """Canonical lowercase UUID string, so the same player always compares equal."""
    if not player_id:
        return None
    try:
        return str(uuid.UUID(str(player_id)))
    except ValueError:
        raise LineupError(f"Invalid player_id: {player_id}")


def to_slot_dicts(slots: Iterable) -> List[Slot]:
    """Accept LineupSlot models or dicts, return validated plain dicts with canonical player ids."""
    result = []
    for slot in slots:
        if isinstance(slot, LineupSlot):
            data = slot.model_dump()
        else:
            data = LineupSlot.model_validate(slot).model_dump()
        data["player_id"] = normalise_player_id(data["player_id"])
        result.append(data)
    return result


def filled_count(slots: List[Slot]) -> int:
    """Number of slots that actually hold a player."""
    return sum(1 for slot in slots if slot.get("player_id"))


# ==========================================
# VALIDATION
# ==========================================

def find_duplicate_players(starting_slots: List[Slot], bench: List[Slot]) -> List[str]:
    """Player ids that appear in more than one slot across starting + bench."""
    seen = set()
    duplicates = []
    for slot in list(starting_slots) + list(bench):
        player_id = slot.get("player_id")
        if not player_id:
            continue
        if player_id in seen and player_id not in duplicates:
            duplicates.append(player_id)
        seen.add(player_id)
    return duplicates


def validate_squad(starting_slots: List[Slot], bench: List[Slot]) -> None:
    """
    Check a full squad before it is saved.
    - at most 15 starting slots and 15 bench slots
    - no player in more than one slot
    """
    if len(starting_slots) > STARTING_SLOT_COUNT:
        raise LineupError(f"A squad can have at most {STARTING_SLOT_COUNT} starting slots")
    if len(bench) > BENCH_SLOT_COUNT:
        raise LineupError(f"A squad can have at most {BENCH_SLOT_COUNT} bench slots")

    duplicates = find_duplicate_players(starting_slots, bench)
    if duplicates:
        raise LineupError(f"Player is already in the lineup: {', '.join(duplicates)}")


def _slot_list(starting_slots: List[Slot], bench: List[Slot], slot_type: SlotType) -> List[Slot]:
    return starting_slots if slot_type == SlotType.STARTING else bench


def _check_index(slots: List[Slot], index: int, slot_type: SlotType) -> None:
    if index < 0 or index >= len(slots):
        raise LineupError(f"No {slot_type.value} slot at index {index}")


# ==========================================
# EDITS (each returns new starting/bench lists)
# ==========================================

def assign_player(
    starting_slots: List[Slot],
    bench: List[Slot],
    slot_type: SlotType,
    index: int,
    player_id: str,
    player_name: Optional[str],
) -> Tuple[List[Slot], List[Slot]]:
    """
    Put a player into one slot.

    Rules:
    - The player must not already occupy a different slot (starting or bench).
    - Starting slots get jersey number index + 1 (1-15 follow slot position).
    - Bench slots leave the jersey number unset for manual entry.
    """
    starting = [dict(s) for s in starting_slots]
    bench_copy = [dict(s) for s in bench]
    target = _slot_list(starting, bench_copy, slot_type)
    _check_index(target, index, slot_type)

    for list_type, slots in ((SlotType.STARTING, starting), (SlotType.BENCH, bench_copy)):
        for i, slot in enumerate(slots):
            if list_type == slot_type and i == index:
                continue
            if slot.get("player_id") == player_id:
                raise LineupError("Player is already in the lineup")

    jersey_no = str(index + 1) if slot_type == SlotType.STARTING else None
    target[index] = {
        **target[index],
        "player_id": player_id,
        "player_name": player_name,
        "jersey_no": jersey_no,
    }
    return starting, bench_copy


def clear_slot(
    starting_slots: List[Slot],
    bench: List[Slot],
    slot_type: SlotType,
    index: int,
) -> Tuple[List[Slot], List[Slot]]:
    starting = [dict(s) for s in starting_slots]
    bench_copy = [dict(s) for s in bench]
    target = _slot_list(starting, bench_copy, slot_type)
    _check_index(target, index, slot_type)

    target[index] = {**target[index], "player_id": None, "player_name": None, "jersey_no": None}
    return starting, bench_copy


def set_jersey_number(
    starting_slots: List[Slot],
    bench: List[Slot],
    slot_type: SlotType,
    index: int,
    jersey_no: Optional[str],
) -> Tuple[List[Slot], List[Slot]]:
    """Manual jersey override. Blank strings clear the number."""
    starting = [dict(s) for s in starting_slots]
    bench_copy = [dict(s) for s in bench]
    target = _slot_list(starting, bench_copy, slot_type)
    _check_index(target, index, slot_type)

    if not target[index].get("player_id"):
        raise LineupError("Cannot set a jersey number on an empty slot")

    cleaned = jersey_no.strip() if jersey_no else None
    target[index] = {**target[index], "jersey_no": cleaned or None}
    return starting, bench_copy


def apply_substitution(
    starting_slots: List[Slot],
    bench: List[Slot],
    player_off_id: str,
    player_on_id: str,
    match_time: int,
    player_off_name: Optional[str] = None,
    player_on_name: Optional[str] = None,
) -> Tuple[List[Slot], List[Slot], Slot]:
    """
    Swap a starting player with a bench player.
    Slots keep their position number/name; the players (with their jersey
    numbers) change places. Returns new starting, new bench and the SubEvent dict.
    """
    starting = [dict(s) for s in starting_slots]
    bench_copy = [dict(s) for s in bench]

    off_index = next((i for i, s in enumerate(starting) if s.get("player_id") == player_off_id), None)
    if off_index is None:
        raise LineupError("Player not found in starting lineup")

    on_index = next((i for i, s in enumerate(bench_copy) if s.get("player_id") == player_on_id), None)
    if on_index is None:
        raise LineupError("Player not found in bench")

    off_slot = starting[off_index]
    on_slot = bench_copy[on_index]

    starting[off_index] = {
        **off_slot,
        "player_id": on_slot.get("player_id"),
        "player_name": on_slot.get("player_name"),
        "jersey_no": on_slot.get("jersey_no"),
    }
    bench_copy[on_index] = {
        **on_slot,
        "player_id": off_slot.get("player_id"),
        "player_name": off_slot.get("player_name"),
        "jersey_no": off_slot.get("jersey_no"),
    }

    sub_event = {
        "time": datetime.utcnow().isoformat(),
        "match_time": match_time,
        "player_off_id": player_off_id,
        "player_off_name": player_off_name or off_slot.get("player_name"),
        "player_on_id": player_on_id,
        "player_on_name": player_on_name or on_slot.get("player_name"),
    }
    return starting, bench_copy, sub_event
