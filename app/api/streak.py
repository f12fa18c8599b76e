from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from app.api.deps import get_faceit_service, get_response_cache
from app.api.faceit_utils.cache import TTLCache, cache_key, get_or_render
from app.api.faceit_utils.service import FaceitService
from app.models.faceit.TodayMode import StreakOrder

router = APIRouter()


@router.get(
    "/streak",
    status_code=status.HTTP_200_OK,
    response_class=PlainTextResponse,
)
async def get_streak(
    nick: Optional[str] = Query(default=None, description="FACEIT nickname, any casing"),
    order: StreakOrder = Query(default=StreakOrder.NEWEST),
    cache: TTLCache = Depends(get_response_cache),
    service: FaceitService = Depends(get_faceit_service),
):
    """Last 10 results as W/L, newest first unless order=oldest."""
    command = "streak" if order == StreakOrder.NEWEST else f"streak-{order.value}"
    text = await get_or_render(
        cache, cache_key(command, nick), lambda: service.streak_text(nick, order)
    )
    return PlainTextResponse(text)
