"""
Match start validation and live match state tests
"""
import uuid

from loguru import logger


def create_squad(client, headers, fixture_id, side):
    response = client.post(f"/api/fixtures/{fixture_id}/squads", json={"side": side}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestStartValidation:

    def test_invalid_fixture_id_is_400(self, client, auth_headers):
        response = client.post("/api/fixtures/not-a-uuid/match-state/start", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "fixture_id must be a valid UUID"

    def test_undefined_fixture_id_is_400(self, client, auth_headers):
        response = client.post("/api/fixtures/undefined/match-state/start", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "fixture_id cannot be 'undefined'"

    def test_unknown_fixture_is_404(self, client, auth_headers):
        response = client.post(f"/api/fixtures/{uuid.uuid4()}/match-state/start", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Fixture not found"

    def test_no_squads(self, client, auth_headers, match_fixture):
        response = client.post(f"/api/fixtures/{match_fixture['id']}/match-state/start", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Both HOME and AWAY squads must be created before starting match"

    def test_missing_away_squad(self, client, auth_headers, match_fixture):
        create_squad(client, auth_headers, match_fixture["id"], "HOME")
        response = client.post(f"/api/fixtures/{match_fixture['id']}/match-state/start", headers=auth_headers)
        assert response.status_code == 400
        assert "AWAY" in response.json()["detail"]

    def test_missing_home_squad(self, client, auth_headers, match_fixture):
        create_squad(client, auth_headers, match_fixture["id"], "AWAY")
        response = client.post(f"/api/fixtures/{match_fixture['id']}/match-state/start", headers=auth_headers)
        assert response.status_code == 400
        assert "HOME" in response.json()["detail"]


class TestStartMatch:

    def test_squad_lock_logged_at_debug(self, client, auth_headers, match_fixture):
        fixture_id = match_fixture["id"]
        home = create_squad(client, auth_headers, fixture_id, "HOME")
        away = create_squad(client, auth_headers, fixture_id, "AWAY")

        messages = []
        sink_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
        try:
            client.post(f"/api/fixtures/{fixture_id}/match-state/start", headers=auth_headers)
        finally:
            logger.remove(sink_id)

        locked = [m for m in messages if "squads locked" in m]
        assert len(locked) == 1
        assert locked[0].startswith("DEBUG")
        assert home["id"] in locked[0] and away["id"] in locked[0]

    def test_start_sets_live_state_and_locks_squads(self, client, auth_headers, match_fixture):
        fixture_id = match_fixture["id"]
        create_squad(client, auth_headers, fixture_id, "HOME")
        create_squad(client, auth_headers, fixture_id, "AWAY")

        response = client.post(f"/api/fixtures/{fixture_id}/match-state/start", headers=auth_headers)
        assert response.status_code == 200, response.text
        state = response.json()
        assert state["status"] == "IN_PROGRESS"
        assert state["half"] == "H1"
        assert state["match_clock"] == 0
        assert state["started_at"] is not None

        squads = client.get(f"/api/fixtures/{fixture_id}/squads", headers=auth_headers).json()
        assert squads["home"]["locked"] is True
        assert squads["away"]["locked"] is True

        fixture = client.get(f"/api/fixtures/{fixture_id}", headers=auth_headers).json()
        assert fixture["status"] == "in_progress"

    def test_short_lineups_warn_but_start(self, client, auth_headers, match_fixture):
        fixture_id = match_fixture["id"]
        create_squad(client, auth_headers, fixture_id, "HOME")
        create_squad(client, auth_headers, fixture_id, "AWAY")

        state = client.post(f"/api/fixtures/{fixture_id}/match-state/start", headers=auth_headers).json()
        assert state["status"] == "IN_PROGRESS"
        assert "HOME starting lineup has 0 of 15 players" in state["warnings"]
        assert len(state["warnings"]) == 2

    def test_second_start_conflicts(self, client, auth_headers, match_fixture):
        fixture_id = match_fixture["id"]
        create_squad(client, auth_headers, fixture_id, "HOME")
        create_squad(client, auth_headers, fixture_id, "AWAY")
        client.post(f"/api/fixtures/{fixture_id}/match-state/start", headers=auth_headers)

        response = client.post(f"/api/fixtures/{fixture_id}/match-state/start", headers=auth_headers)
        assert response.status_code == 409

    def test_locked_squad_cannot_be_edited(self, client, auth_headers, match_fixture, players):
        fixture_id = match_fixture["id"]
        create_squad(client, auth_headers, fixture_id, "HOME")
        create_squad(client, auth_headers, fixture_id, "AWAY")
        client.post(f"/api/fixtures/{fixture_id}/match-state/start", headers=auth_headers)

        response = client.post(
            f"/api/fixtures/{fixture_id}/squads/HOME/slots",
            json={"slot_type": "starting", "index": 0, "player_id": players[0]["id"]},
            headers=auth_headers,
        )
        assert response.status_code == 409

        response = client.post(f"/api/fixtures/{fixture_id}/squads", json={"side": "HOME"}, headers=auth_headers)
        assert response.status_code == 409


class TestMatchStateLifecycle:

    def test_default_state_before_start(self, client, auth_headers, match_fixture):
        response = client.get(f"/api/fixtures/{match_fixture['id']}/match-state", headers=auth_headers)
        assert response.status_code == 200
        state = response.json()
        assert state["id"] is None
        assert state["status"] == "NOT_STARTED"
        assert state["home_goals"] == 0

    def test_update_without_state_is_404(self, client, auth_headers, match_fixture):
        response = client.put(
            f"/api/fixtures/{match_fixture['id']}/match-state",
            json={"home_points": 1},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_update_and_complete(self, client, auth_headers, match_fixture):
        fixture_id = match_fixture["id"]
        create_squad(client, auth_headers, fixture_id, "HOME")
        create_squad(client, auth_headers, fixture_id, "AWAY")
        client.post(f"/api/fixtures/{fixture_id}/match-state/start", headers=auth_headers)

        response = client.put(
            f"/api/fixtures/{fixture_id}/match-state",
            json={"home_goals": 1, "home_points": 4, "away_points": 6, "match_clock": 2100, "half": "H2"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["half"] == "H2"
        assert response.json()["home_goals"] == 1

        bad = client.put(f"/api/fixtures/{fixture_id}/match-state", json={"away_goals": -1}, headers=auth_headers)
        assert bad.status_code == 400

        response = client.post(f"/api/fixtures/{fixture_id}/match-state/complete", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "COMPLETED"
        assert response.json()["completed_at"] is not None

        fixture = client.get(f"/api/fixtures/{fixture_id}", headers=auth_headers).json()
        assert fixture["status"] == "completed"

    def test_match_summary(self, client, auth_headers, match_fixture):
        fixture_id = match_fixture["id"]
        client.post(
            f"/api/fixtures/{fixture_id}/events",
            json={"side": "HOME", "timestamp": 60, "event_type": "Goal", "event_category": "Scoring"},
            headers=auth_headers,
        )
        client.post(
            f"/api/fixtures/{fixture_id}/events",
            json={"side": "AWAY", "timestamp": 90, "event_type": "Wide", "event_category": "Scoring"},
            headers=auth_headers,
        )

        summary = client.get(f"/api/fixtures/{fixture_id}/match-summary", headers=auth_headers).json()
        assert summary["event_count"] == 2
        assert summary["team_stats"]["home"]["goals"] == 1
        assert summary["team_stats"]["away"]["wides"] == 1
        assert summary["match_state"]["status"] == "NOT_STARTED"
        assert summary["home_squad"] is None
