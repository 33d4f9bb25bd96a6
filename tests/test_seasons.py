"""
Season and competition API tests
"""


def create_season(client, headers, club_id, name, is_active=True, start="2024-01-01", end="2024-12-31"):
    response = client.post(
        "/api/seasons",
        json={"club_id": club_id, "name": name, "start_date": start, "end_date": end, "is_active": is_active},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestSeasons:

    def test_new_active_season_deactivates_others(self, client, auth_headers, club):
        old = create_season(client, auth_headers, club["id"], "2023 Season", start="2023-01-01", end="2023-12-31")
        new = create_season(client, auth_headers, club["id"], "2024 Season")

        seasons = client.get(f"/api/seasons?club_id={club['id']}", headers=auth_headers).json()
        active = {s["id"]: s["is_active"] for s in seasons}
        assert active == {new["id"]: True, old["id"]: False}
        assert [s["id"] for s in seasons] == [new["id"], old["id"]]

    def test_inactive_season_leaves_active_one(self, client, auth_headers, club):
        active = create_season(client, auth_headers, club["id"], "2024 Season")
        create_season(client, auth_headers, club["id"], "Planning 2025", is_active=False, start="2025-01-01", end="2025-12-31")

        seasons = client.get(f"/api/seasons?club_id={club['id']}", headers=auth_headers).json()
        assert [s["id"] for s in seasons if s["is_active"]] == [active["id"]]

    def test_end_before_start_rejected(self, client, auth_headers, club):
        response = client.post(
            "/api/seasons",
            json={"club_id": club["id"], "name": "Backwards", "start_date": "2024-12-31", "end_date": "2024-01-01"},
            headers=auth_headers,
        )
        assert response.status_code == 400


class TestCompetitions:

    def test_team_resolves_active_season(self, client, auth_headers, club, team):
        old = create_season(client, auth_headers, club["id"], "2023 Season", start="2023-01-01", end="2023-12-31")
        client.post(
            "/api/competitions",
            json={"season_id": old["id"], "name": "2023 Shield", "type": "Shield"},
            headers=auth_headers,
        )
        before = client.get(f"/api/competitions?team_id={team['id']}", headers=auth_headers).json()
        assert [c["name"] for c in before] == ["2023 Shield"]

        season = create_season(client, auth_headers, club["id"], "2024 Season")
        for name in ("Senior Hurling Championship", "Division 2 League"):
            response = client.post(
                "/api/competitions",
                json={"season_id": season["id"], "name": name, "type": "League"},
                headers=auth_headers,
            )
            assert response.status_code == 200, response.text

        competitions = client.get(f"/api/competitions?team_id={team['id']}", headers=auth_headers).json()
        assert [c["name"] for c in competitions] == ["Division 2 League", "Senior Hurling Championship"]

        by_season = client.get(f"/api/competitions?season_id={season['id']}", headers=auth_headers).json()
        assert len(by_season) == 2

    def test_no_active_season_returns_empty_list(self, client, auth_headers, club, team):
        create_season(client, auth_headers, club["id"], "Old Season", is_active=False)
        response = client.get(f"/api/competitions?team_id={team['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_season_or_team_required(self, client, auth_headers):
        response = client.get("/api/competitions", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "season_id or team_id is required"
