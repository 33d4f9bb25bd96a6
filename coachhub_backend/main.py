from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import select
from loguru import logger

from coachhub_backend.core.config import AUTO_SEED
from coachhub_backend.core.logging import configure_logging
from coachhub_backend.core.database import init_db, get_sync_session
from coachhub_backend.seed.seed_all import seed_all
from coachhub_backend.models.club_model import Club

# --- Routers ---
from coachhub_backend.core.auth import router as auth_router
from coachhub_backend.routes.club_routes import router as club_router
from coachhub_backend.routes.team_routes import router as team_router
from coachhub_backend.routes.season_routes import router as season_router
from coachhub_backend.routes.player_routes import router as player_router
from coachhub_backend.routes.fixture_routes import router as fixture_router
from coachhub_backend.routes.squad_routes import router as squad_router
from coachhub_backend.routes.match_state_routes import router as match_state_router
from coachhub_backend.routes.match_event_routes import router as match_event_router
from coachhub_backend.routes.lineup_routes import router as lineup_router
from coachhub_backend.routes.training_routes import router as training_router
from coachhub_backend.routes.development_note_routes import router as development_note_router
from coachhub_backend.routes.availability_routes import router as availability_router
from coachhub_backend.routes.fitness_test_routes import router as fitness_test_router

configure_logging()

app = FastAPI(title="Coach Hub API")


@app.on_event("startup")
async def on_startup():
    # 1. Init DB tables async
    await init_db()

    # 2. Auto-seed a demo club in sync mode
    if not AUTO_SEED:
        logger.info("Auto-seed disabled")
        return

    with get_sync_session() as session:
        club_count = len(session.exec(select(Club.id)).all())

    if club_count == 0:
        logger.info("No clubs found. Auto-seeding database...")
        seed_all()
    else:
        logger.info("Database already seeded ({} clubs). Skipping auto-seed.", club_count)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(club_router, prefix="/api", tags=["Clubs"])
app.include_router(team_router, prefix="/api", tags=["Teams"])
app.include_router(season_router, prefix="/api", tags=["Seasons"])
app.include_router(player_router, prefix="/api", tags=["Players"])
app.include_router(fixture_router, prefix="/api", tags=["Fixtures"])
app.include_router(squad_router, prefix="/api", tags=["Squads"])
app.include_router(match_state_router, prefix="/api", tags=["Match State"])
app.include_router(match_event_router, prefix="/api", tags=["Match Events"])
app.include_router(lineup_router, prefix="/api", tags=["Lineups"])
app.include_router(training_router, prefix="/api", tags=["Training"])
app.include_router(development_note_router, prefix="/api", tags=["Development Notes"])
app.include_router(availability_router, prefix="/api", tags=["Availability"])
app.include_router(fitness_test_router, prefix="/api", tags=["Fitness Tests"])
