"""
Nickname -> PlayerRecord resolution.

FACEIT nickname lookups are case-sensitive while chat users are not, so a
handful of casings are tried at once and the first one that resolves wins.
"""

import asyncio
import logging
from typing import Optional

from app.api.faceit_utils.client import FaceitClient
from app.core.errors import (
    FaceitError,
    NotFoundUpstreamError,
    PlayerNotFoundError,
    UpstreamUnavailableError,
)
from app.models.faceit.PlayerRecord import PlayerRecord

logger = logging.getLogger("app.faceit.resolver")


def normalize_nickname(nickname: Optional[str], default_nickname: str) -> str:
    """The typed nick, or the default one when nothing but blanks was typed."""
    return (nickname or "").strip() or (default_nickname or "").strip()


def nickname_variations(nickname: str) -> list[str]:
    """as typed, lower, UPPER, Capitalized; duplicates removed, order kept."""
    candidates = [
        nickname,
        nickname.lower(),
        nickname.upper(),
        nickname[:1].upper() + nickname[1:].lower(),
    ]
    return list(dict.fromkeys(candidates))


async def _lookup(client: FaceitClient, candidate: str, timeout: float) -> dict:
    try:
        return await asyncio.wait_for(client.get_player(candidate, timeout=timeout), timeout)
    except asyncio.TimeoutError as e:
        raise UpstreamUnavailableError(f"timeout resolving {candidate!r}") from e


async def resolve_player(
    client: FaceitClient,
    nickname: Optional[str] = None,
    *,
    default_nickname: str,
    game: str = "cs2",
    timeout: float = 4.0,
) -> PlayerRecord:
    nick = normalize_nickname(nickname, default_nickname)
    if not nick:
        raise PlayerNotFoundError("empty nickname")

    tasks = [
        asyncio.create_task(_lookup(client, candidate, timeout))
        for candidate in nickname_variations(nick)
    ]
    failures: list[BaseException] = []

    try:
        for next_done in asyncio.as_completed(tasks):
            try:
                return PlayerRecord.from_api(await next_done, game)
            except FaceitError as e:
                failures.append(e)
    finally:
        for task in tasks:
            task.cancel()
        # collect what the losing candidates raised so none goes unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)

    outages = [
        e
        for e in failures
        if isinstance(e, UpstreamUnavailableError) and not isinstance(e, NotFoundUpstreamError)
    ]
    if outages and len(outages) == len(failures):
        # nothing answered "not found"; the API itself is unreachable
        raise UpstreamUnavailableError(f"could not resolve {nick!r}: {outages[0]}")

    logger.info("No nickname variation of %r resolved (%d tried)", nick, len(tasks))
    raise PlayerNotFoundError(f"no variation of {nick!r} resolved")
