# seed_all.py
# Orchestrates all seed scripts to populate the database in the correct order.

from loguru import logger

from coachhub_backend.seed.seed_club import seed_club
from coachhub_backend.seed.seed_players import seed_players
from coachhub_backend.seed.seed_fixtures import seed_fixtures


def seed_all():
    logger.info("Starting full database seeding...")

    logger.info("Step 1: Seeding club, teams and season...")
    seed_club()

    logger.info("Step 2: Seeding players...")
    seed_players()

    logger.info("Step 3: Seeding fixtures...")
    seed_fixtures()

    logger.info("Database seeding complete.")


if __name__ == "__main__":
    import asyncio
    from coachhub_backend.core.database import init_db
    from coachhub_backend.core.logging import configure_logging

    configure_logging()
    asyncio.run(init_db())
    seed_all()
