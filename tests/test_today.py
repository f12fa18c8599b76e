from datetime import datetime, timezone

from app.api.faceit_utils.session_cache import SessionEloCache
from app.api.faceit_utils.today import (
    matches_since,
    session_matches,
    summarize_window,
    today_matches,
    window_start,
)
from app.models.faceit.MatchSummary import MatchSummary
from app.models.faceit.TodayMode import TodayMode
from conftest import PLAYER_ID, history_item

HOUR = 3600


def match_at(ts, won=True, match_id=None):
    return MatchSummary.from_api(history_item(match_id or f"m{ts}", won, ts))


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def test_calendar_window_starts_at_local_midnight():
    now = utc(2026, 3, 14, 20, 0)

    assert window_start(now, TodayMode.CALENDAR, "UTC") == utc(2026, 3, 14)
    # 20:00 UTC is 17:00 in Sao Paulo (UTC-3), same local day
    start = window_start(now, TodayMode.CALENDAR, "America/Sao_Paulo")
    assert start.timestamp() == utc(2026, 3, 14, 3, 0).timestamp()


def test_clock_window_before_start_hour_belongs_to_previous_day():
    assert window_start(utc(2026, 3, 14, 6, 59), TodayMode.CLOCK, "UTC", 7) == utc(2026, 3, 13, 7)
    assert window_start(utc(2026, 3, 14, 7, 0), TodayMode.CLOCK, "UTC", 7) == utc(2026, 3, 14, 7)


def test_calendar_boundary_match_counts_as_today():
    boundary = int(utc(2026, 3, 14).timestamp())
    matches = [match_at(boundary), match_at(boundary - 1)]

    window = today_matches(matches, utc(2026, 3, 14, 20), TodayMode.CALENDAR, tz_name="UTC")

    assert [m.timestamp for m in window] == [boundary]


def test_clock_boundary_match_counts_as_today():
    boundary = int(utc(2026, 3, 14, 7).timestamp())
    matches = [match_at(boundary + 10), match_at(boundary), match_at(boundary - 1)]

    window = today_matches(
        matches, utc(2026, 3, 14, 9), TodayMode.CLOCK, tz_name="UTC", day_start_hour=7
    )

    assert [m.timestamp for m in window] == [boundary + 10, boundary]


def test_matches_since_ignores_untimed_matches():
    untimed = MatchSummary(match_id="x")

    assert matches_since([untimed], utc(2026, 1, 1)) == []


def test_session_gap_exactly_at_limit_keeps_match():
    now = utc(2026, 3, 14, 20)
    newest = int(now.timestamp()) - HOUR
    matches = [
        match_at(newest),
        match_at(newest - 8 * HOUR),  # gap == limit: same session
        match_at(newest - 16 * HOUR - 1),  # one second too far
    ]

    session = session_matches(matches, now, 8 * HOUR)

    assert [m.timestamp for m in session] == [newest, newest - 8 * HOUR]


def test_session_is_over_when_newest_match_is_too_old():
    now = utc(2026, 3, 14, 20)
    ts = int(now.timestamp())

    assert session_matches([match_at(ts - 8 * HOUR)], now, 8 * HOUR) != []
    assert session_matches([match_at(ts - 8 * HOUR - 1)], now, 8 * HOUR) == []


def test_session_mode_dispatch_orders_unsorted_input():
    now = utc(2026, 3, 14, 20)
    ts = int(now.timestamp())
    matches = [match_at(ts - 3 * HOUR), match_at(ts - HOUR), match_at(ts - 2 * HOUR)]

    window = today_matches(matches, now, TodayMode.SESSION, gap_seconds=8 * HOUR)

    assert [m.timestamp for m in window] == [ts - HOUR, ts - 2 * HOUR, ts - 3 * HOUR]


def test_summarize_empty_window_is_zero():
    summary = summarize_window([], PLAYER_ID, 2150, SessionEloCache())

    assert summary.matches == 0
    assert summary.wins == 0
    assert summary.losses == 0
    assert summary.rating_delta == 0


def test_summarize_first_sighting_uses_estimate_then_real_delta():
    sessions = SessionEloCache()
    window = [match_at(2000, won=True), match_at(1000, won=False), match_at(500, won=True)]

    first = summarize_window(window, PLAYER_ID, 2150, sessions, elo_per_match=25)
    assert (first.wins, first.losses) == (2, 1)
    assert first.rating_delta == 25
    assert sessions.get_session(PLAYER_ID, 500).initial_elo == 2125

    # one more win, real rating moved by 31 rather than the 25 estimate
    window = [match_at(3000, won=True)] + window
    second = summarize_window(window, PLAYER_ID, 2181, sessions, elo_per_match=25)
    assert second.wins == 3
    assert second.rating_delta == 56


def test_summarize_without_rating_falls_back_to_estimate():
    window = [match_at(1000, won=False), match_at(500, won=False)]

    summary = summarize_window(window, PLAYER_ID, None, SessionEloCache(), elo_per_match=25)

    assert summary.rating_delta == -50


def test_calendar_and_session_baselines_do_not_evict_each_other():
    sessions = SessionEloCache()
    day = [match_at(5000, won=True), match_at(1000, won=True)]
    session = [match_at(5000, won=True)]

    summarize_window(day, PLAYER_ID, 2150, sessions, 25, TodayMode.CALENDAR)
    summarize_window(session, PLAYER_ID, 2150, sessions, 25, TodayMode.SESSION)

    # the rating moved by 30 since; both windows keep their first baseline
    day_again = summarize_window(day, PLAYER_ID, 2180, sessions, 25, TodayMode.CALENDAR)
    session_again = summarize_window(session, PLAYER_ID, 2180, sessions, 25, TodayMode.SESSION)

    assert day_again.rating_delta == 80
    assert session_again.rating_delta == 55
