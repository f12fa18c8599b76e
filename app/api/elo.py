from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from app.api.deps import get_faceit_service, get_response_cache
from app.api.faceit_utils.cache import TTLCache, cache_key, get_or_render
from app.api.faceit_utils.service import FaceitService
from app.models.faceit.TodayMode import TodayMode

router = APIRouter()


@router.get(
    "/elo",
    status_code=status.HTTP_200_OK,
    response_class=PlainTextResponse,
)
async def get_elo(
    nick: Optional[str] = Query(default=None, description="FACEIT nickname, any casing"),
    mode: Optional[TodayMode] = Query(default=None, description="Override the today window"),
    cache: TTLCache = Depends(get_response_cache),
    service: FaceitService = Depends(get_faceit_service),
):
    """
    GET /elo - Current rating

    Returns "2150" in plain mode, or "Elo: 2150. Today -> Win: 1 Lose: 0 (+25)"
    with the configured (or requested) today window.
    """
    command = "elo" if mode is None else f"elo-{mode.value}"
    text = await get_or_render(
        cache, cache_key(command, nick), lambda: service.elo_text(nick, mode)
    )
    return PlainTextResponse(text)
