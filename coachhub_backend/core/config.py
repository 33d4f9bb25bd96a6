import os

# =====================================
# Global configuration for Coach Hub
# =====================================

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# DATABASE_PATH:
# SQLite file used by both the async (startup) and sync (routes) engines.
DATABASE_PATH = os.getenv("COACHHUB_DATABASE_PATH", os.path.join(BASE_DIR, "coachhub.db"))

# SQL_ECHO:
# When True, SQLAlchemy prints every statement (noisy, local debugging only).
SQL_ECHO = os.getenv("COACHHUB_SQL_ECHO", "false").lower() == "true"

# TEST_MODE:
# When True, DEBUG becomes the default log level.
TEST_MODE = os.getenv("COACHHUB_TEST_MODE", "false").lower() == "true"

# AUTO_SEED:
# Seed a demo club on startup when the database has no clubs.
AUTO_SEED = os.getenv("COACHHUB_AUTO_SEED", "true").lower() == "true"

# Logging
LOG_LEVEL = os.getenv("COACHHUB_LOG_LEVEL", "DEBUG" if TEST_MODE else "INFO")
LOG_FILE = os.getenv("COACHHUB_LOG_FILE")  # e.g. "logs/coachhub_{time:YYYY-MM-DD}.log"

# Auth sessions
SESSION_TTL_HOURS = int(os.getenv("COACHHUB_SESSION_TTL_HOURS", "720"))  # 30 days

# Timezone used when rendering fixture dates for people (exports, messages)
CLUB_TIMEZONE = os.getenv("COACHHUB_CLUB_TIMEZONE", "Europe/Dublin")

# Squad layout
STARTING_SLOT_COUNT = 15
BENCH_SLOT_COUNT = 15

# Demo data (only used by the auto-seed)
SEED_ADMIN_EMAIL = os.getenv("COACHHUB_SEED_ADMIN_EMAIL", "admin@coachhub.local")
SEED_ADMIN_PASSWORD = os.getenv("COACHHUB_SEED_ADMIN_PASSWORD", "changeme123")
