# seed_players.py
# Seeds a starter roster for every team that has no players yet.

from sqlmodel import Session, select
from loguru import logger

from coachhub_backend.core.database import sync_engine
from coachhub_backend.models.team_model import Team
from coachhub_backend.models.player_model import Player, PositionGroup, DominantSide

FIRST_NAMES = [
    "Cian", "Oisín", "Darragh", "Seán", "Conor", "Fionn", "Tadhg", "Eoin", "Rory", "Ciarán",
    "Aoife", "Niamh", "Saoirse", "Clodagh", "Róisín", "Ciara", "Orla", "Áine", "Sadhbh", "Laoise",
]
SURNAMES = ["Murphy", "Kelly", "O'Brien", "Walsh", "Byrne", "Ryan", "Doyle", "McCarthy", "Gallagher", "Nolan"]

# (position group, how many) for a 20 player panel
PANEL_SHAPE = [
    (PositionGroup.GK, 2),
    (PositionGroup.BACK, 7),
    (PositionGroup.MID, 4),
    (PositionGroup.FWD, 7),
]

POSITION_LABELS = {
    PositionGroup.GK: "GK",
    PositionGroup.BACK: "FB, CB",
    PositionGroup.MID: "MF",
    PositionGroup.FWD: "CF, FF",
}


def seed_players():
    logger.info("Seeding players...")

    with Session(sync_engine) as session:
        teams = session.exec(select(Team)).all()
        created = 0

        for team_index, team in enumerate(teams):
            if session.exec(select(Player.id).where(Player.team_id == team.id)).first():
                continue

            # Camogie panels use the second half of the first names list
            names = FIRST_NAMES[10:] if team.sport == "CAMOGIE" else FIRST_NAMES[:10]
            jersey = 1
            for group, count in PANEL_SHAPE:
                for depth in range(count):
                    first = names[(jersey - 1) % len(names)]
                    surname = SURNAMES[(jersey + team_index) % len(SURNAMES)]
                    session.add(Player(
                        team_id=team.id,
                        name=f"{first} {surname}",
                        positions=POSITION_LABELS[group],
                        jersey_no=jersey,
                        dominant_side=DominantSide.LEFT if jersey % 4 == 0 else DominantSide.RIGHT,
                        primary_position_group=group,
                        depth_order=depth,
                    ))
                    jersey += 1
                    created += 1

        session.commit()
        logger.info("Seeded {} players across {} teams", created, len(teams))
