# __init__.py
# Imports all seed functions for easy batch seeding.

from .seed_club import seed_club
from .seed_players import seed_players
from .seed_fixtures import seed_fixtures
