"""
Player availability and fitness test API tests
"""
from sqlmodel import Session, select

from coachhub_backend.models import FitnessTest


def mark(client, headers, player_id, status, **target):
    return client.post("/api/availability", json={"player_id": player_id, "status": status, **target}, headers=headers)


class TestAvailability:

    def test_fixture_answers_grouped_for_selection(self, client, auth_headers, match_fixture, players):
        fixture_id = match_fixture["id"]
        assert mark(client, auth_headers, players[0]["id"], "available", fixture_id=fixture_id).status_code == 200
        assert mark(client, auth_headers, players[1]["id"], "unavailable", fixture_id=fixture_id).status_code == 200
        assert mark(client, auth_headers, players[2]["id"], "maybe", fixture_id=fixture_id).status_code == 200

        grouped = client.get(f"/api/fixtures/{fixture_id}/availability", headers=auth_headers).json()
        assert [p["player_id"] for p in grouped["available"]] == [players[0]["id"]]
        assert [p["player_id"] for p in grouped["unavailable"]] == [players[1]["id"]]
        assert [p["player_id"] for p in grouped["maybe"]] == [players[2]["id"]]
        assert len(grouped["no_response"]) == 14

    def test_second_answer_replaces_first(self, client, auth_headers, match_fixture, players):
        player_id = players[0]["id"]
        first = mark(client, auth_headers, player_id, "maybe", fixture_id=match_fixture["id"]).json()
        second = mark(client, auth_headers, player_id, "available", fixture_id=match_fixture["id"]).json()
        assert second["id"] == first["id"]

        records = client.get(f"/api/availability?player_id={player_id}", headers=auth_headers).json()
        assert [r["status"] for r in records] == ["available"]

    def test_training_session_availability(self, client, auth_headers, team, players):
        training = client.post(
            "/api/training-sessions", json={"team_id": team["id"], "date": "2024-05-01T19:00:00"}, headers=auth_headers,
        ).json()
        response = mark(
            client, auth_headers, players[0]["id"], "unavailable",
            training_session_id=training["id"], notes="Exams",
        )
        assert response.status_code == 200

        records = client.get(f"/api/availability?training_session_id={training['id']}", headers=auth_headers).json()
        assert records[0]["notes"] == "Exams"
        assert records[0]["fixture_id"] is None

    def test_exactly_one_target_required(self, client, auth_headers, match_fixture, players):
        assert mark(client, auth_headers, players[0]["id"], "available").status_code == 400

    def test_filter_required(self, client, auth_headers):
        assert client.get("/api/availability", headers=auth_headers).status_code == 400

    def test_player_from_other_team_rejected(self, client, auth_headers, club, match_fixture):
        other_team = client.post(
            "/api/teams", json={"club_id": club["id"], "name": "Minor Hurling"}, headers=auth_headers,
        ).json()
        outsider = client.post(
            "/api/players", json={"team_id": other_team["id"], "name": "Outsider"}, headers=auth_headers,
        ).json()
        response = mark(client, auth_headers, outsider["id"], "available", fixture_id=match_fixture["id"])
        assert response.status_code == 400

    def test_update_status(self, client, auth_headers, match_fixture, players):
        record = mark(client, auth_headers, players[0]["id"], "maybe", fixture_id=match_fixture["id"]).json()
        response = client.put(f"/api/availability/{record['id']}", json={"status": "available"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "available"

    def test_non_member_forbidden(self, client, make_user, match_fixture, players):
        outsider = make_user(email="outsider@example.com")
        response = mark(client, outsider, players[0]["id"], "available", fixture_id=match_fixture["id"])
        assert response.status_code == 403


class TestFitnessTests:

    def test_record_and_list_newest_first(self, client, auth_headers, players):
        player_id = players[0]["id"]
        for date, value in (("2024-02-01T10:00:00", 5.9), ("2024-04-01T10:00:00", 5.7)):
            response = client.post(
                "/api/fitness-tests",
                json={"player_id": player_id, "test_type": "40m sprint", "date": date, "value": value, "unit": "s"},
                headers=auth_headers,
            )
            assert response.status_code == 200, response.text

        tests = client.get(f"/api/fitness-tests?player_id={player_id}", headers=auth_headers).json()
        assert [t["value"] for t in tests] == [5.7, 5.9]
        assert tests[0]["unit"] == "s"

    def test_blank_test_type_rejected(self, client, auth_headers, players):
        response = client.post(
            "/api/fitness-tests",
            json={"player_id": players[0]["id"], "test_type": " ", "date": "2024-02-01T10:00:00"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_deleting_player_removes_results(self, client, auth_headers, engine, players):
        player_id = players[0]["id"]
        client.post(
            "/api/fitness-tests",
            json={"player_id": player_id, "test_type": "Yo-Yo IR1", "date": "2024-02-01T10:00:00", "value": 17.2},
            headers=auth_headers,
        )
        assert client.delete(f"/api/players/{player_id}", headers=auth_headers).status_code == 200
        with Session(engine) as db:
            assert db.exec(select(FitnessTest)).all() == []
