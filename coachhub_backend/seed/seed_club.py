# seed_club.py
# Seeds the demo admin user, a demo club with its teams, and an active season.

from datetime import date
from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.config import SEED_ADMIN_EMAIL, SEED_ADMIN_PASSWORD
from coachhub_backend.core.database import sync_engine
from coachhub_backend.core.auth import hash_password
from coachhub_backend.models.user_model import User
from coachhub_backend.models.club_model import Club, Membership, ClubRole
from coachhub_backend.models.team_model import Team
from coachhub_backend.models.season_model import Season, Competition, CompetitionType

DEMO_CLUB_NAME = "Naomh Bríd CLG"

DEMO_TEAMS = [
    {"name": "Senior Hurling", "short_name": "SH", "sport": "HURLING", "grade": "Senior", "age_group": "Adult"},
    {"name": "Senior Football", "short_name": "SF", "sport": "GAELIC_FOOTBALL", "grade": "Senior", "age_group": "Adult"},
    {"name": "U16 Camogie", "short_name": "U16C", "sport": "CAMOGIE", "grade": "Minor", "age_group": "U16"},
]

DEMO_COMPETITIONS = [
    ("County League Division 2", CompetitionType.LEAGUE),
    ("Intermediate Championship", CompetitionType.CHAMPIONSHIP),
]


def seed_club():
    logger.info("Seeding demo club...")

    with Session(sync_engine) as session:
        # 1. Admin user
        admin = session.exec(select(User).where(User.email == SEED_ADMIN_EMAIL)).first()
        if not admin:
            admin = User(
                email=SEED_ADMIN_EMAIL,
                name="Club Admin",
                password_hash=hash_password(SEED_ADMIN_PASSWORD),
            )
            session.add(admin)
            session.flush()
            logger.info("Created admin user {}", SEED_ADMIN_EMAIL)

        # 2. Club + admin membership
        club = session.exec(select(Club).where(Club.name == DEMO_CLUB_NAME)).first()
        if club:
            logger.info("Demo club already exists. Skipping.")
            session.commit()
            return

        club = Club(
            name=DEMO_CLUB_NAME,
            county="Dublin",
            colours="Green and White",
            primary_color="#0B6E3A",
            secondary_color="#FFFFFF",
            created_by=admin.id,
        )
        session.add(club)
        session.flush()
        session.add(Membership(club_id=club.id, user_id=admin.id, role=ClubRole.CLUB_ADMIN))

        # 3. Teams
        for team_data in DEMO_TEAMS:
            session.add(Team(club_id=club.id, colours=club.colours, home_venue="Club Grounds", **team_data))

        # 4. Active season and its competitions
        year = date.today().year
        season = Season(
            club_id=club.id,
            name=f"{year} Season",
            start_date=date(year, 1, 1),
            end_date=date(year, 12, 31),
            is_active=True,
        )
        session.add(season)
        session.flush()

        for name, competition_type in DEMO_COMPETITIONS:
            session.add(Competition(season_id=season.id, name=name, type=competition_type))

        session.commit()
        logger.info("Seeded club {} with {} teams", club.name, len(DEMO_TEAMS))
