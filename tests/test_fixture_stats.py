"""
Fixture stats and report formatting tests (no database)
"""
import uuid
from datetime import datetime

import pytest

from coachhub_backend.models.fixture_model import Fixture
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.match_state_model import MatchEvent, EventCategory
from coachhub_backend.services.fixture_stats import (
    team_totals, top_performers, format_local_date, generate_whatsapp_report,
)
from coachhub_backend.services.match_state import aggregate_side_stats


def event(event_type, category, player_id=None, side=None):
    return MatchEvent(
        fixture_id=uuid.uuid4(),
        player_id=player_id,
        side=side,
        timestamp=0,
        event_type=event_type,
        event_category=category,
    )


@pytest.fixture
def sample_fixture():
    return Fixture(
        team_id=uuid.uuid4(),
        opponent="Kilmacud Crokes",
        venue="Parnell Park",
        date=datetime(2024, 6, 1, 14, 0),
    )


class TestTeamTotals:

    def test_scoring_and_conversion(self):
        events = [
            event("Goal", EventCategory.SCORING),
            event("Point", EventCategory.SCORING),
            event("Point", EventCategory.SCORING),
            event("Wide", EventCategory.SCORING),
        ]
        totals = team_totals(events)
        assert totals["goals"] == 1
        assert totals["points"] == 2
        assert totals["total_score"] == 5
        assert totals["conversion_rate"] == pytest.approx(5 / 4 / 3 * 100)

    def test_puckouts_and_turnovers(self):
        events = [
            event("Won Clean", EventCategory.PUCKOUTS),
            event("Broken Won", EventCategory.PUCKOUTS),
            event("Lost", EventCategory.PUCKOUTS),
            event("Lost", EventCategory.PUCKOUTS),
            event("Turnover Won", EventCategory.POSSESSION),
            event("Turnover Lost", EventCategory.POSSESSION),
            event("Turnover Lost", EventCategory.POSSESSION),
        ]
        totals = team_totals(events)
        assert totals["puckout_win_percentage"] == pytest.approx(50.0)
        assert totals["turnover_differential"] == -1

    def test_no_events(self):
        totals = team_totals([])
        assert totals["conversion_rate"] == 0.0
        assert totals["puckout_win_percentage"] == 0.0


class TestReport:

    def test_date_rendered_in_club_timezone(self, sample_fixture):
        # Irish summer time is UTC+1
        assert format_local_date(sample_fixture) == "Sat 01 Jun 2024, 15:00"

    def test_top_performers_and_report(self, sample_fixture):
        star = Player(id=uuid.uuid4(), team_id=sample_fixture.team_id, name="Cian Murphy")
        events = [
            event("Goal", EventCategory.SCORING, player_id=star.id),
            event("Point", EventCategory.SCORING, player_id=star.id),
            event("Point", EventCategory.SCORING, player_id=uuid.uuid4()),
        ]
        performers = top_performers(events, [star])
        assert performers == [{"player_id": star.id, "player_name": "Cian Murphy", "contributions": 2}]

        report = generate_whatsapp_report(sample_fixture, events, [star])
        assert "vs Kilmacud Crokes" in report
        assert "Venue: Parnell Park" in report
        assert "Total Score: 1-2 (5)" in report
        assert "1. Cian Murphy: 2 contributions" in report


class TestSideStats:

    def test_events_without_side_are_ignored(self):
        from coachhub_backend.models.squad_model import TeamSide

        stats = aggregate_side_stats([
            event("Goal", EventCategory.SCORING, side=TeamSide.HOME),
            event("Point", EventCategory.SCORING, side=TeamSide.AWAY),
            event("Won Clean", EventCategory.PUCKOUTS, side=TeamSide.AWAY),
            event("Point", EventCategory.SCORING),
        ])
        assert stats["home"] == {"goals": 1, "points": 0, "wides": 0, "events": 1}
        assert stats["away"] == {"goals": 0, "points": 1, "wides": 0, "events": 2}
