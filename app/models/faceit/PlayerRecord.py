from typing import Any, Optional

from pydantic import BaseModel

from app.core.errors import MalformedResponseError


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class PlayerRecord(BaseModel):
    """Canonical player as returned by /players?nickname=, scoped to one game."""

    player_id: str
    nickname: str
    game: str = "cs2"
    elo: Optional[int] = None
    skill_level: Optional[int] = None

    @property
    def has_game_data(self) -> bool:
        return self.elo is not None

    @classmethod
    def from_api(cls, data: dict, game: str = "cs2") -> "PlayerRecord":
        player_id = data.get("player_id")
        if not player_id:
            raise MalformedResponseError("player payload without player_id")

        games = data.get("games")
        game_data = games.get(game) if isinstance(games, dict) else None
        if not isinstance(game_data, dict):
            game_data = {}
        return cls(
            player_id=str(player_id),
            nickname=str(data.get("nickname") or ""),
            game=game,
            elo=_as_int(game_data.get("faceit_elo")),
            skill_level=_as_int(game_data.get("skill_level")),
        )
