import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from app.api.faceit_utils import formatter
from app.api.faceit_utils.client import FaceitClient
from app.api.faceit_utils.history import (
    RECENT_MATCHES,
    STREAK_LENGTH,
    fetch_matches,
    match_results,
    recent_stats,
)
from app.api.faceit_utils.resolver import resolve_player
from app.api.faceit_utils.session_cache import SessionEloCache
from app.api.faceit_utils.today import TODAY_HISTORY_LIMIT, summarize_window, today_matches
from app.core.config import Settings
from app.core.errors import NoGameDataError, NotFoundUpstreamError, UpstreamUnavailableError
from app.models.faceit.AggregatedStats import AggregatedStats
from app.models.faceit.PlayerRecord import PlayerRecord
from app.models.faceit.TodayMode import EloMode, StatsPeriod, StreakOrder, TodayMode

logger = logging.getLogger("app.faceit.service")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FaceitService:
    """Resolves a player, aggregates their matches and renders chat lines."""

    def __init__(
        self,
        client: FaceitClient,
        settings: Settings,
        session_cache: Optional[SessionEloCache] = None,
        now: Callable[[], datetime] = utc_now,
    ):
        self.client = client
        self.settings = settings
        self.session_cache = session_cache or SessionEloCache(settings.cache_max_entries)
        self._now = now

    async def resolve(self, nickname: Optional[str] = None) -> PlayerRecord:
        return await resolve_player(
            self.client,
            nickname,
            default_nickname=self.settings.default_player,
            game=self.settings.game,
            timeout=self.settings.request_timeout,
        )

    async def resolve_with_game_data(self, nickname: Optional[str] = None) -> PlayerRecord:
        player = await self.resolve(nickname)
        if not player.has_game_data:
            raise NoGameDataError(self.settings.game, f"{player.nickname} has no {player.game} rating")
        return player

    async def today_summary(
        self, player: PlayerRecord, mode: Optional[TodayMode] = None
    ) -> AggregatedStats:
        s = self.settings
        mode = mode or s.today_mode
        matches = await fetch_matches(self.client, player.player_id, s.game, TODAY_HISTORY_LIMIT)
        window = today_matches(
            matches,
            self._now(),
            mode,
            tz_name=s.today_tz,
            day_start_hour=s.day_start_hour,
            gap_seconds=s.session_gap_seconds,
        )
        return summarize_window(
            window, player.player_id, player.elo, self.session_cache, s.elo_per_match, mode
        )

    async def elo_text(
        self, nickname: Optional[str] = None, mode: Optional[TodayMode] = None
    ) -> str:
        player = await self.resolve_with_game_data(nickname)
        if self.settings.elo_mode == EloMode.PLAIN and mode is None:
            return formatter.format_elo(player)

        summary = await self.today_summary(player, mode)
        return formatter.format_elo_today(player, summary)

    async def stats_text(
        self, nickname: Optional[str] = None, period: StatsPeriod = StatsPeriod.LIFETIME
    ) -> str:
        player = await self.resolve_with_game_data(nickname)

        if period == StatsPeriod.RECENT:
            stats = await recent_stats(self.client, player.player_id, player.game, RECENT_MATCHES)
            if not stats.matches and stats.skipped:
                # matches exist but none could be read; not the same as "no matches"
                raise UpstreamUnavailableError(
                    f"no detail for any of {stats.skipped} recent matches of {player.nickname}"
                )
            return formatter.format_recent_stats(player, stats)

        try:
            data = await self.client.get_player_stats(player.player_id, player.game)
        except NotFoundUpstreamError as e:
            raise NoGameDataError(player.game, str(e)) from e
        return formatter.format_lifetime_stats(player, data.get("lifetime") or {})

    async def streak_text(
        self, nickname: Optional[str] = None, order: StreakOrder = StreakOrder.NEWEST
    ) -> str:
        player = await self.resolve(nickname)
        matches = await fetch_matches(self.client, player.player_id, player.game, STREAK_LENGTH)
        results = match_results(matches, player.player_id, order)
        return formatter.format_streak(results, order)
