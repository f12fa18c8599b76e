from dotenv import load_dotenv

load_dotenv()

import logging
import sys

from fastapi import FastAPI
from app.api import elo
from app.api import stats
from app.api import streak
from app.api import system
from app.api.faceit_utils import FaceitClient, FaceitService, SessionEloCache, TTLCache
from app.core.config import get_settings
from app.core.errors import register_error_handlers
from app.core.logger import setup_logging

logger = logging.getLogger("app")

settings = get_settings()
setup_logging(settings.log_level)


app = FastAPI(
    title="FACEIT ELO Bot",
    description="""
    Plain-text FACEIT rating, stats and streak lines for chat-bot
    urlfetch commands (Nightbot, StreamElements).
    """,
    version="1.0.0",
    license_info={
        "name": "MIT",
    },
)

register_error_handlers(app)


@app.on_event("startup")
async def on_startup():
    # also covers `uvicorn main:app`, where __main__ below never runs
    settings.validate_required()

    client = FaceitClient(
        settings.faceit_key,
        base_url=settings.faceit_base_url,
        timeout=settings.request_timeout,
    )
    app.state.faceit_client = client
    app.state.response_cache = TTLCache(
        settings.cache_ttl_seconds, maxsize=settings.cache_max_entries
    )
    app.state.faceit_service = FaceitService(
        client, settings, SessionEloCache(settings.cache_max_entries)
    )

    logger.info("Server running on port %s", settings.port)
    logger.info("Default player: %s", settings.default_player)
    logger.info("Cache TTL: %ss", settings.cache_ttl_seconds)
    logger.info("Endpoints:")
    logger.info("  GET /health - Health check")
    logger.info("  GET /elo?nick=<nickname> - Current ELO")
    logger.info("  GET /stats?player=<nickname>&period=lifetime|recent - Player statistics")
    logger.info("  GET /streak?nick=<nickname> - Last 10 matches")


@app.on_event("shutdown")
async def on_shutdown():
    client = getattr(app.state, "faceit_client", None)
    if client is not None:
        await client.aclose()


app.include_router(system.router, tags=["System"])
app.include_router(elo.router, tags=["ELO"])
app.include_router(stats.router, tags=["Statistics"])
app.include_router(streak.router, tags=["Streak"])


if __name__ == "__main__":
    import uvicorn

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("Configuration Error: %s", e)
        sys.exit(1)

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
