from typing import Any, Sequence

from app.models.faceit.AggregatedStats import AggregatedStats
from app.models.faceit.PlayerRecord import PlayerRecord
from app.models.faceit.TodayMode import StreakOrder

SEPARATOR = " | "
NO_MATCHES_MESSAGE = "Nenhuma partida encontrada"


def _number(value: Any) -> Any:
    """Upstream value as-is, 0 when missing or empty."""
    return value if value not in (None, "") else 0


def format_elo(player: PlayerRecord) -> str:
    return str(_number(player.elo))


def format_elo_today(player: PlayerRecord, summary: AggregatedStats) -> str:
    text = (
        f"Elo: {_number(player.elo)}. "
        f"Today -> Win: {summary.wins} Lose: {summary.losses}"
    )
    if summary.matches:
        text += f" ({summary.rating_delta:+d})"
    return text


def _header(player: PlayerRecord) -> list[str]:
    return [
        f"{player.nickname}:",
        f"ELO: {_number(player.elo)}",
        f"Level: {_number(player.skill_level)}",
    ]


def format_lifetime_stats(player: PlayerRecord, lifetime: dict) -> str:
    return SEPARATOR.join(
        _header(player)
        + [
            f"Vitórias: {_number(lifetime.get('Wins'))}",
            f"Winrate: {_number(lifetime.get('Win Rate %'))}%",
            f"K/D: {_number(lifetime.get('Average K/D Ratio'))}",
            f"HS%: {_number(lifetime.get('Average Headshots %'))}%",
        ]
    )


def format_recent_stats(player: PlayerRecord, stats: AggregatedStats) -> str:
    if not stats.matches:
        return SEPARATOR.join(_header(player) + [NO_MATCHES_MESSAGE])

    return SEPARATOR.join(
        _header(player)
        + [
            f"Últimas {stats.matches}: {stats.wins}V {stats.losses}D",
            f"Winrate: {stats.win_rate:.1f}%",
            f"K/D: {stats.kd_ratio:.2f}",
            f"HS%: {stats.headshot_pct:.1f}%",
            f"Kills: {stats.average_kills:.1f}",
        ]
    )


def format_streak(results: Sequence[bool], order: StreakOrder = StreakOrder.NEWEST) -> str:
    """`results` must already be in `order`; only the label depends on it."""
    if not results:
        return NO_MATCHES_MESSAGE

    tokens = " ".join("W" if won else "L" for won in results)
    label = f"Últimas {len(results)}"
    if order == StreakOrder.OLDEST:
        label += " (antiga -> recente)"
    return f"{label}: {tokens}"
