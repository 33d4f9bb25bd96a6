"""
Lineup rule tests (pure functions, no database)
"""
import pytest

from coachhub_backend.models.squad_model import SlotType
from coachhub_backend.services.lineup import (
    LineupError, DEFAULT_POSITIONS, empty_starting_slots, empty_bench, filled_count,
    find_duplicate_players, validate_squad, assign_player, clear_slot,
    set_jersey_number, apply_substitution, to_slot_dicts,
)


@pytest.fixture
def starting():
    return empty_starting_slots()


@pytest.fixture
def bench():
    return empty_bench()


class TestDefaultLayout:

    def test_fifteen_gaelic_positions(self, starting):
        assert len(starting) == 15
        assert [s["position_no"] for s in starting] == list(range(1, 16))
        assert starting[0]["position_name"] == "GK (Goalkeeper)"
        assert starting[14]["position_name"] == "LCF (L Corner Forward)"
        assert len(DEFAULT_POSITIONS) == 15

    def test_bench_numbered_after_starting(self, bench):
        assert len(bench) == 15
        assert bench[0]["position_no"] == 16
        assert bench[0]["position_name"] == "Bench 1"
        assert bench[-1]["position_no"] == 30

    def test_empty_layout_has_no_players(self, starting, bench):
        assert filled_count(starting) == 0
        assert filled_count(bench) == 0


class TestAssignPlayer:

    def test_starting_jersey_follows_slot_position(self, starting, bench):
        for index in range(15):
            starting, bench = assign_player(starting, bench, SlotType.STARTING, index, f"p{index}", f"Player {index}")
        assert [s["jersey_no"] for s in starting] == [str(n) for n in range(1, 16)]
        assert filled_count(starting) == 15

    def test_bench_leaves_jersey_unset(self, starting, bench):
        _, bench = assign_player(starting, bench, SlotType.BENCH, 3, "p1", "Player 1")
        assert bench[3]["player_id"] == "p1"
        assert bench[3]["jersey_no"] is None

    def test_duplicate_in_starting_rejected(self, starting, bench):
        starting, bench = assign_player(starting, bench, SlotType.STARTING, 0, "p1", "Player 1")
        with pytest.raises(LineupError, match="already in the lineup"):
            assign_player(starting, bench, SlotType.STARTING, 5, "p1", "Player 1")

    def test_duplicate_across_starting_and_bench_rejected(self, starting, bench):
        starting, bench = assign_player(starting, bench, SlotType.BENCH, 0, "p1", "Player 1")
        with pytest.raises(LineupError):
            assign_player(starting, bench, SlotType.STARTING, 0, "p1", "Player 1")

    def test_reassigning_same_slot_is_allowed(self, starting, bench):
        starting, bench = assign_player(starting, bench, SlotType.STARTING, 2, "p1", "Player 1")
        starting, bench = assign_player(starting, bench, SlotType.STARTING, 2, "p1", "Player 1")
        assert starting[2]["player_id"] == "p1"

    def test_inputs_are_not_mutated(self, starting, bench):
        assign_player(starting, bench, SlotType.STARTING, 0, "p1", "Player 1")
        assert starting[0]["player_id"] is None

    def test_bad_index(self, starting, bench):
        with pytest.raises(LineupError, match="No starting slot at index 15"):
            assign_player(starting, bench, SlotType.STARTING, 15, "p1", "Player 1")


class TestSlotEdits:

    def test_clear_slot(self, starting, bench):
        starting, bench = assign_player(starting, bench, SlotType.STARTING, 4, "p1", "Player 1")
        starting, bench = clear_slot(starting, bench, SlotType.STARTING, 4)
        assert starting[4]["player_id"] is None
        assert starting[4]["jersey_no"] is None
        assert starting[4]["position_no"] == 5

    def test_manual_jersey(self, starting, bench):
        _, bench = assign_player(starting, bench, SlotType.BENCH, 0, "p1", "Player 1")
        _, bench = set_jersey_number(starting, bench, SlotType.BENCH, 0, " 22 ")
        assert bench[0]["jersey_no"] == "22"

    def test_jersey_on_empty_slot_rejected(self, starting, bench):
        with pytest.raises(LineupError):
            set_jersey_number(starting, bench, SlotType.STARTING, 0, "1")


class TestValidateSquad:

    def test_duplicates_found(self, starting, bench):
        starting[0]["player_id"] = "p1"
        bench[0]["player_id"] = "p1"
        assert find_duplicate_players(starting, bench) == ["p1"]
        with pytest.raises(LineupError):
            validate_squad(starting, bench)

    def test_too_many_starting_slots(self, starting, bench):
        with pytest.raises(LineupError):
            validate_squad(starting + [dict(starting[0])], bench)

    def test_valid_squad_passes(self, starting, bench):
        validate_squad(starting, bench)


class TestSubstitution:

    def test_players_swap_and_slots_keep_positions(self, starting, bench):
        starting, bench = assign_player(starting, bench, SlotType.STARTING, 6, "off", "Starter")
        starting, bench = assign_player(starting, bench, SlotType.BENCH, 1, "on", "Sub")

        starting, bench, sub = apply_substitution(starting, bench, "off", "on", 1800)

        assert starting[6]["player_id"] == "on"
        assert starting[6]["position_no"] == 7
        assert bench[1]["player_id"] == "off"
        assert bench[1]["jersey_no"] == "7"
        assert sub["match_time"] == 1800
        assert sub["player_off_name"] == "Starter"
        assert sub["player_on_name"] == "Sub"

    def test_off_player_must_be_starting(self, starting, bench):
        with pytest.raises(LineupError, match="starting lineup"):
            apply_substitution(starting, bench, "ghost", "on", 0)

    def test_on_player_must_be_on_bench(self, starting, bench):
        starting, bench = assign_player(starting, bench, SlotType.STARTING, 0, "off", "Starter")
        with pytest.raises(LineupError, match="bench"):
            apply_substitution(starting, bench, "off", "ghost", 0)


class TestSlotNormalisation:

    def test_player_ids_lowercased(self):
        raw = [{"position_no": 1, "position_name": "GK", "player_id": "6F1C2B9E-0D44-4F1A-8C3E-2B7A9D5E4C10"}]
        assert to_slot_dicts(raw)[0]["player_id"] == "6f1c2b9e-0d44-4f1a-8c3e-2b7a9d5e4c10"

    def test_empty_player_id_becomes_none(self):
        assert to_slot_dicts([{"position_no": 1, "position_name": "GK", "player_id": ""}])[0]["player_id"] is None

    def test_non_uuid_rejected(self):
        with pytest.raises(LineupError, match="Invalid player_id"):
            to_slot_dicts([{"position_no": 1, "position_name": "GK", "player_id": "p1"}])
