import asyncio
import logging
from typing import Sequence, Union

from app.api.faceit_utils.client import FaceitClient
from app.core.errors import FaceitError
from app.models.faceit.AggregatedStats import AggregatedStats
from app.models.faceit.MatchSummary import MatchDetail, MatchSummary, parse_history
from app.models.faceit.TodayMode import StreakOrder

logger = logging.getLogger("app.faceit.history")

STREAK_LENGTH = 10
RECENT_MATCHES = 30

# one entry per match: the detail, or why it could not be fetched
DetailResult = Union[MatchDetail, Exception]


async def fetch_matches(
    client: FaceitClient, player_id: str, game: str, limit: int
) -> list[MatchSummary]:
    payload = await client.get_history(player_id, game, limit=limit)
    return parse_history(payload)[:limit]


def match_results(
    matches: Sequence[MatchSummary],
    player_id: str,
    order: StreakOrder = StreakOrder.NEWEST,
) -> list[bool]:
    """Win flags for each match. History arrives newest first."""
    results = [match.won_by(player_id) for match in matches]
    if order == StreakOrder.OLDEST:
        results.reverse()
    return results


async def _fetch_detail(client: FaceitClient, match_id: str, player_id: str) -> MatchDetail:
    data = await client.get_match_stats(match_id)
    return MatchDetail.from_api(match_id, data, player_id)


async def fetch_details(
    client: FaceitClient, matches: Sequence[MatchSummary], player_id: str
) -> list[DetailResult]:
    results = await asyncio.gather(
        *(_fetch_detail(client, m.match_id, player_id) for m in matches),
        return_exceptions=True,
    )
    for result in results:
        # only expected per-match failures are tolerated
        if isinstance(result, BaseException) and not isinstance(
            result, (FaceitError, ValueError)
        ):
            raise result
    return list(results)


def aggregate_details(
    matches: Sequence[MatchSummary],
    details: Sequence[DetailResult],
    player_id: str,
) -> AggregatedStats:
    """
    Reduce per-match details into an AggregatedStats.

    Matches whose detail failed are left out of every figure and only counted
    in `skipped`. Win/loss comes from the history entry so it agrees with the
    streak view.
    """
    usable = [
        (match, detail)
        for match, detail in zip(matches, details)
        if isinstance(detail, MatchDetail)
    ]
    skipped = len(matches) - len(usable)
    if skipped:
        reasons = {
            type(d).__name__ for d in details if not isinstance(d, MatchDetail)
        }
        logger.warning(
            "Skipped %d/%d matches without detail for %s (%s)",
            skipped,
            len(matches),
            player_id,
            ", ".join(sorted(reasons)),
        )

    if not usable:
        return AggregatedStats(skipped=skipped)

    total = len(usable)
    wins = sum(1 for match, _ in usable if match.won_by(player_id))
    kills = sum(detail.kills for _, detail in usable)
    deaths = sum(detail.deaths for _, detail in usable)
    headshots = sum(detail.headshots for _, detail in usable)

    return AggregatedStats(
        matches=total,
        wins=wins,
        losses=total - wins,
        average_kills=round(kills / total, 1),
        kd_ratio=round(kills / deaths, 2) if deaths > 0 else float(kills),
        headshot_pct=round(headshots / kills * 100, 1) if kills > 0 else 0,
        win_rate=round(wins / total * 100, 1),
        skipped=skipped,
    )


async def recent_stats(
    client: FaceitClient,
    player_id: str,
    game: str,
    limit: int = RECENT_MATCHES,
) -> AggregatedStats:
    matches = await fetch_matches(client, player_id, game, limit)
    if not matches:
        return AggregatedStats()

    details = await fetch_details(client, matches, player_id)
    return aggregate_details(matches, details, player_id)
