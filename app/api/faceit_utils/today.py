"""
"Today" windows over recent match history.

Three ways of deciding which matches count as today:
- calendar: since local midnight
- clock: since DAY_START_HOUR local time (a late night still belongs to the
  previous day until that hour)
- session: matches chained by gaps no longer than SESSION_GAP_HOURS, as long
  as the newest one is itself within the gap of now

A match timestamped exactly on a boundary belongs to the newer window, and a
gap exactly equal to the limit keeps the session going.
"""

from datetime import datetime, time, timedelta
from datetime import timezone as dt_timezone
from typing import Optional, Sequence

from pytz import timezone

from app.api.faceit_utils.session_cache import SessionEloCache
from app.models.faceit.AggregatedStats import AggregatedStats
from app.models.faceit.MatchSummary import MatchSummary
from app.models.faceit.TodayMode import TodayMode

TODAY_HISTORY_LIMIT = 50


def window_start(
    now: datetime,
    mode: TodayMode,
    tz_name: str = "UTC",
    day_start_hour: int = 7,
) -> datetime:
    """Start of the current calendar/clock day in tz_name, as an aware datetime."""
    tz = timezone(tz_name)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt_timezone.utc)
    local_now = now.astimezone(tz)

    start_hour = day_start_hour if mode == TodayMode.CLOCK else 0
    start_date = local_now.date()
    if local_now.hour < start_hour:
        start_date -= timedelta(days=1)

    return tz.localize(datetime.combine(start_date, time(start_hour)))


def _newest_first(matches: Sequence[MatchSummary]) -> list[MatchSummary]:
    timed = [m for m in matches if m.timestamp is not None]
    return sorted(timed, key=lambda m: m.timestamp, reverse=True)


def matches_since(matches: Sequence[MatchSummary], start: datetime) -> list[MatchSummary]:
    boundary = start.timestamp()
    return [m for m in _newest_first(matches) if m.timestamp >= boundary]


def session_matches(
    matches: Sequence[MatchSummary], now: datetime, gap_seconds: float
) -> list[MatchSummary]:
    ordered = _newest_first(matches)
    if not ordered or now.timestamp() - ordered[0].timestamp > gap_seconds:
        return []

    session = [ordered[0]]
    for match in ordered[1:]:
        if session[-1].timestamp - match.timestamp > gap_seconds:
            break
        session.append(match)
    return session


def today_matches(
    matches: Sequence[MatchSummary],
    now: datetime,
    mode: TodayMode,
    *,
    tz_name: str = "UTC",
    day_start_hour: int = 7,
    gap_seconds: float = 8 * 3600,
) -> list[MatchSummary]:
    if mode == TodayMode.SESSION:
        return session_matches(matches, now, gap_seconds)
    return matches_since(matches, window_start(now, mode, tz_name, day_start_hour))


def summarize_window(
    matches: Sequence[MatchSummary],
    player_id: str,
    current_elo: Optional[int],
    session_cache: SessionEloCache,
    elo_per_match: int = 25,
    mode: Optional[TodayMode] = None,
) -> AggregatedStats:
    if not matches:
        return AggregatedStats()

    wins = sum(1 for m in matches if m.won_by(player_id))
    losses = len(matches) - wins
    estimate = (wins - losses) * elo_per_match

    if current_elo is None:
        delta = estimate
    else:
        started = min(m.timestamp for m in matches if m.timestamp is not None)
        session = session_cache.get_session(player_id, started, mode)
        if session is None:
            session = session_cache.set_session(
                player_id, started, current_elo - estimate, mode
            )
        delta = current_elo - session.initial_elo

    return AggregatedStats(
        matches=len(matches),
        wins=wins,
        losses=losses,
        rating_delta=delta,
        win_rate=round(wins / len(matches) * 100, 1),
    )
