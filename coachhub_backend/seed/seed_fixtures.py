# seed_fixtures.py
# Seeds an upcoming fixture for the first demo team so the match tracker has something to open.

from datetime import datetime, timedelta
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.database import sync_engine
from coachhub_backend.models.team_model import Team
from coachhub_backend.models.season_model import Season, Competition
from coachhub_backend.models.fixture_model import Fixture


def seed_fixtures():
    logger.info("Seeding fixtures...")

    with Session(sync_engine) as session:
        team = session.exec(select(Team).order_by(Team.name)).first()
        if not team:
            logger.warning("No teams found. Run seed_club first.")
            return

        if session.exec(select(Fixture.id).where(Fixture.team_id == team.id)).first():
            logger.info("Team {} already has fixtures. Skipping.", team.name)
            return

        competition = session.exec(
            select(Competition)
            .join(Season, Season.id == Competition.season_id)
            .where(Season.club_id == team.club_id, Season.is_active == True)  # noqa: E712
        ).first()

        # Next Sunday, 15:00 UTC
        today = datetime.utcnow().replace(hour=15, minute=0, second=0, microsecond=0)
        days_until_sunday = (6 - today.weekday()) % 7 or 7
        throw_in = today + timedelta(days=days_until_sunday)

        session.add(Fixture(
            team_id=team.id,
            competition_id=competition.id if competition else None,
            opponent="Na Fianna",
            venue=team.home_venue,
            date=throw_in,
            home_team_name=team.name,
            home_colours=team.colours,
            away_team_name="Na Fianna",
            away_colours="Blue and Yellow",
        ))
        session.commit()
        logger.info("Seeded fixture for {} on {}", team.name, throw_in)
