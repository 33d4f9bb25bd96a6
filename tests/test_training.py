"""
Training sessions, attendance and development notes tests
"""


def create_session(client, headers, team_id, date):
    response = client.post(
        "/api/training-sessions",
        json={"team_id": team_id, "date": date, "location": "Club Grounds", "focus": "Puckouts"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestTrainingSessions:

    def test_sessions_listed_newest_first(self, client, auth_headers, team):
        older = create_session(client, auth_headers, team["id"], "2024-05-01T19:00:00")
        newer = create_session(client, auth_headers, team["id"], "2024-05-08T19:00:00")

        sessions = client.get(f"/api/training-sessions?team_id={team['id']}", headers=auth_headers).json()
        assert [s["id"] for s in sessions] == [newer["id"], older["id"]]

    def test_attendance_batch_upserts(self, client, auth_headers, team, players):
        training = create_session(client, auth_headers, team["id"], "2024-05-01T19:00:00")
        body = {
            "session_id": training["id"],
            "records": [
                {"player_id": players[0]["id"], "status": "TRAINED"},
                {"player_id": players[1]["id"], "status": "INJURED", "note": "Knee"},
            ],
        }
        assert client.post("/api/attendance/batch", json=body, headers=auth_headers).json() == {"updated": 2}

        body["records"] = [{"player_id": players[1]["id"], "status": "TRAINED"}]
        client.post("/api/attendance/batch", json=body, headers=auth_headers)

        records = client.get(f"/api/attendance?session_id={training['id']}", headers=auth_headers).json()
        assert len(records) == 2
        assert {r["status"] for r in records} == {"TRAINED"}

        detail = client.get(f"/api/training-sessions/{training['id']}", headers=auth_headers).json()
        assert len(detail["attendance"]) == 2

    def test_attendance_percentage_on_player(self, client, auth_headers, team, players):
        player_id = players[0]["id"]
        for date, status in (("2024-05-01T19:00:00", "TRAINED"), ("2024-05-08T19:00:00", "EXCUSED")):
            training = create_session(client, auth_headers, team["id"], date)
            client.post(
                "/api/attendance/batch",
                json={"session_id": training["id"], "records": [{"player_id": player_id, "status": status}]},
                headers=auth_headers,
            )

        player = client.get(f"/api/players/{player_id}", headers=auth_headers).json()
        assert player["training_attendance_percentage"] == 50.0


class TestDevelopmentNotes:

    def test_create_list_update(self, client, auth_headers, players):
        player_id = players[0]["id"]
        note = client.post(
            "/api/development-notes",
            json={"player_id": player_id, "strengths": "First touch", "targets": "Left side striking"},
            headers=auth_headers,
        ).json()

        notes = client.get(f"/api/development-notes?player_id={player_id}", headers=auth_headers).json()
        assert [n["id"] for n in notes] == [note["id"]]

        updated = client.put(
            f"/api/development-notes/{note['id']}", json={"coach_notes": "Improving"}, headers=auth_headers,
        ).json()
        assert updated["coach_notes"] == "Improving"
        assert updated["strengths"] == "First touch"


class TestTrainingReports:

    def mark_attendance(self, client, headers, training_id, records):
        response = client.post(
            "/api/attendance/batch", json={"session_id": training_id, "records": records}, headers=headers,
        )
        assert response.status_code == 200, response.text

    def test_team_report_counts_every_player(self, client, auth_headers, team, players):
        may = create_session(client, auth_headers, team["id"], "2024-05-01T19:00:00")
        june = create_session(client, auth_headers, team["id"], "2024-06-01T19:00:00")
        self.mark_attendance(client, auth_headers, may["id"], [
            {"player_id": players[0]["id"], "status": "TRAINED"},
            {"player_id": players[1]["id"], "status": "INJURED"},
        ])
        self.mark_attendance(client, auth_headers, june["id"], [
            {"player_id": players[0]["id"], "status": "EXCUSED"},
        ])

        report = client.get(f"/api/teams/{team['id']}/training-reports/players", headers=auth_headers).json()
        assert len(report) == 17
        by_id = {row["player_id"]: row["counts"] for row in report}
        assert by_id[players[0]["id"]] == {"trained": 1, "injured": 0, "excused": 1, "no_contact": 0}
        assert by_id[players[1]["id"]]["injured"] == 1
        assert by_id[players[5]["id"]] == {"trained": 0, "injured": 0, "excused": 0, "no_contact": 0}

        may_only = client.get(
            f"/api/teams/{team['id']}/training-reports/players?to=2024-05-15T00:00:00", headers=auth_headers,
        ).json()
        assert {row["player_id"]: row["counts"] for row in may_only}[players[0]["id"]]["excused"] == 0

    def test_player_report_lists_sessions_newest_first(self, client, auth_headers, team, players):
        player_id = players[0]["id"]
        may = create_session(client, auth_headers, team["id"], "2024-05-01T19:00:00")
        june = create_session(client, auth_headers, team["id"], "2024-06-01T19:00:00")
        self.mark_attendance(client, auth_headers, may["id"], [{"player_id": player_id, "status": "TRAINED"}])
        self.mark_attendance(client, auth_headers, june["id"], [{"player_id": player_id, "status": "NO_CONTACT"}])

        url = f"/api/teams/{team['id']}/training-reports/players/{player_id}"
        report = client.get(url, headers=auth_headers).json()
        assert report["counts"]["trained"] == 1
        assert report["counts"]["no_contact"] == 1
        assert [s["session_id"] for s in report["sessions"]] == [june["id"], may["id"]]
        assert report["sessions"][0]["session_title"] == "Puckouts"

        from_june = client.get(f"{url}?from=2024-05-15T00:00:00", headers=auth_headers).json()
        assert [s["session_id"] for s in from_june["sessions"]] == [june["id"]]

    def test_bad_date_rejected(self, client, auth_headers, team):
        response = client.get(f"/api/teams/{team['id']}/training-reports/players?from=last-week", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid from date format. Use ISO 8601 format"

    def test_player_from_other_team_is_404(self, client, auth_headers, club, team):
        other_team = client.post(
            "/api/teams", json={"club_id": club["id"], "name": "Minor Hurling"}, headers=auth_headers,
        ).json()
        outsider = client.post(
            "/api/players", json={"team_id": other_team["id"], "name": "Outsider"}, headers=auth_headers,
        ).json()
        response = client.get(
            f"/api/teams/{team['id']}/training-reports/players/{outsider['id']}", headers=auth_headers,
        )
        assert response.status_code == 404
