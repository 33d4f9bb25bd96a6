# coachhub_backend/services/fixture_stats.py
# Event aggregation for fixtures and the WhatsApp-friendly match report.

from typing import List, Dict, Any
import pytz

from coachhub_backend.core.config import CLUB_TIMEZONE
from coachhub_backend.models.fixture_model import Fixture
from coachhub_backend.models.player_model import Player
from coachhub_backend.models.match_state_model import MatchEvent, EventCategory, GOAL_VALUE

club_tz = pytz.timezone(CLUB_TIMEZONE)

PUCKOUT_WON_TYPES = ("Won Clean", "Broken Won")


def fixture_stats(events: List[MatchEvent]) -> Dict[str, Any]:
    """Totals by event type, by player, and a scoring-only breakdown."""
    events_by_type: Dict[str, int] = {}
    events_by_player: Dict[str, int] = {}
    scoring_summary: Dict[str, int] = {}

    for event in events:
        events_by_type[event.event_type] = events_by_type.get(event.event_type, 0) + 1

        if event.player_id:
            key = str(event.player_id)
            events_by_player[key] = events_by_player.get(key, 0) + 1

        if event.event_category == EventCategory.SCORING:
            scoring_summary[event.event_type] = scoring_summary.get(event.event_type, 0) + 1

    return {
        "total_events": len(events),
        "events_by_type": events_by_type,
        "events_by_player": events_by_player,
        "scoring_summary": scoring_summary,
    }


def team_totals(events: List[MatchEvent]) -> Dict[str, Any]:
    """
    Team-level numbers for the match report.
    - conversion_rate: score value per shot as a % of the max (all goals)
    - puckout_win_percentage: won / (won + lost)
    - turnover_differential: turnovers won - turnovers lost
    """
    goals = points = wides = 0
    puckouts_won = puckouts_lost = 0
    turnovers_won = turnovers_lost = 0
    frees_for = frees_against = 0

    for event in events:
        if event.event_category == EventCategory.SCORING:
            if event.event_type == "Goal":
                goals += 1
            elif event.event_type == "Point":
                points += 1
            elif event.event_type == "Wide":
                wides += 1
        elif event.event_category == EventCategory.PUCKOUTS:
            if event.event_type in PUCKOUT_WON_TYPES:
                puckouts_won += 1
            elif event.event_type == "Lost":
                puckouts_lost += 1
        elif event.event_category == EventCategory.POSSESSION:
            if event.event_type == "Turnover Won":
                turnovers_won += 1
            elif event.event_type == "Turnover Lost":
                turnovers_lost += 1
        elif event.event_category == EventCategory.DISCIPLINE:
            if event.event_type == "Free Won":
                frees_for += 1
            elif event.event_type == "Free Conceded":
                frees_against += 1

    total_score = goals * GOAL_VALUE + points
    total_shots = goals + points + wides
    puckout_total = puckouts_won + puckouts_lost

    return {
        "goals": goals,
        "points": points,
        "wides": wides,
        "total_score": total_score,
        "conversion_rate": (total_score / total_shots / GOAL_VALUE) * 100 if total_shots else 0.0,
        "puckout_win_percentage": (puckouts_won / puckout_total) * 100 if puckout_total else 0.0,
        "turnover_differential": turnovers_won - turnovers_lost,
        "frees_for": frees_for,
        "frees_against": frees_against,
    }


def top_performers(events: List[MatchEvent], players: List[Player], limit: int = 5) -> List[Dict[str, Any]]:
    """Players ranked by number of tracked events (only players on the team)."""
    player_map = {p.id: p for p in players}
    contributions: Dict[Any, int] = {}
    for event in events:
        if event.player_id and event.player_id in player_map:
            contributions[event.player_id] = contributions.get(event.player_id, 0) + 1

    ranked = sorted(contributions.items(), key=lambda item: item[1], reverse=True)
    return [
        {"player_id": pid, "player_name": player_map[pid].name, "contributions": count}
        for pid, count in ranked[:limit]
    ]


def format_local_date(fixture: Fixture) -> str:
    """Fixture dates are stored as naive UTC; render them in the club timezone."""
    local = pytz.utc.localize(fixture.date).astimezone(club_tz)
    return local.strftime("%a %d %b %Y, %H:%M")


def generate_whatsapp_report(fixture: Fixture, events: List[MatchEvent], players: List[Player]) -> str:
    totals = team_totals(events)
    performers = top_performers(events, players)

    lines = [
        "*Match Summary*",
        f"Date: {format_local_date(fixture)}",
        f"vs {fixture.opponent}",
    ]
    if fixture.venue:
        lines.append(f"Venue: {fixture.venue}")
    lines.append("")

    lines.append("*Team Totals*")
    lines.append(f"Goals: {totals['goals']}")
    lines.append(f"Points: {totals['points']}")
    lines.append(f"Wides: {totals['wides']}")
    lines.append(f"Total Score: {totals['goals']}-{totals['points']} ({totals['total_score']})")
    lines.append(f"Conversion Rate: {totals['conversion_rate']:.1f}%")
    lines.append(f"Puckout Win %: {totals['puckout_win_percentage']:.1f}%")
    lines.append(f"Turnover Differential: {totals['turnover_differential']}")
    lines.append(f"Frees For: {totals['frees_for']}")
    lines.append(f"Frees Against: {totals['frees_against']}")

    if performers:
        lines.append("")
        lines.append("*Top Performers*")
        for i, performer in enumerate(performers, start=1):
            lines.append(f"{i}. {performer['player_name']}: {performer['contributions']} contributions")

    return "\n".join(lines) + "\n"
