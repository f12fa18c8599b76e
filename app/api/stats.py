from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from app.api.deps import get_faceit_service, get_response_cache
from app.api.faceit_utils.cache import TTLCache, cache_key, get_or_render
from app.api.faceit_utils.service import FaceitService
from app.models.faceit.TodayMode import StatsPeriod

router = APIRouter()


@router.get(
    "/stats",
    status_code=status.HTTP_200_OK,
    response_class=PlainTextResponse,
)
async def get_stats(
    player: Optional[str] = Query(default=None, description="FACEIT nickname, any casing"),
    period: StatsPeriod = Query(default=StatsPeriod.LIFETIME),
    cache: TTLCache = Depends(get_response_cache),
    service: FaceitService = Depends(get_faceit_service),
):
    """
    GET /stats - Player statistics line

    Query Parameters:
        - player (str, optional): defaults to PLAYER_NICKNAME
        - period (lifetime|recent): lifetime summary from FACEIT, or figures
          recomputed from the last 30 matches

    Response:
        "nick: | ELO: 2150 | Level: 10 | Vitórias: 100 | Winrate: 55% | K/D: 1.2 | HS%: 48%"
    """
    command = "stats" if period == StatsPeriod.LIFETIME else f"stats-{period.value}"
    text = await get_or_render(
        cache, cache_key(command, player), lambda: service.stats_text(player, period)
    )
    return PlainTextResponse(text)
