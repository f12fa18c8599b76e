from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.errors import MalformedResponseError


def _dicts(value) -> list[dict]:
    """Only the dict entries of an upstream list; anything else yields nothing."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _faction_ids(teams: dict, faction: str) -> FrozenSet[str]:
    team = teams.get(faction)
    if not isinstance(team, dict):
        return frozenset()
    return frozenset(
        str(p["player_id"]) for p in _dicts(team.get("players")) if p.get("player_id")
    )


class MatchSummary(BaseModel):
    """One entry of /players/{id}/history."""

    model_config = ConfigDict(frozen=True)

    match_id: str
    started_at: Optional[int] = None
    finished_at: Optional[int] = None
    faction1: FrozenSet[str] = frozenset()
    faction2: FrozenSet[str] = frozenset()
    winner: Optional[str] = None

    @property
    def timestamp(self) -> Optional[int]:
        return self.finished_at if self.finished_at is not None else self.started_at

    def faction_of(self, player_id: str) -> Optional[str]:
        if player_id in self.faction1:
            return "faction1"
        if player_id in self.faction2:
            return "faction2"
        return None

    def won_by(self, player_id: str) -> bool:
        faction = self.faction_of(player_id)
        return faction is not None and faction == self.winner

    @classmethod
    def from_api(cls, item: dict) -> Optional["MatchSummary"]:
        """Returns None for items that can't be attributed to a match."""
        match_id = item.get("match_id")
        teams = item.get("teams")
        if not match_id or not isinstance(teams, dict):
            return None

        results = item.get("results")
        winner = results.get("winner") if isinstance(results, dict) else None
        return cls(
            match_id=str(match_id),
            started_at=item.get("started_at"),
            finished_at=item.get("finished_at"),
            faction1=_faction_ids(teams, "faction1"),
            faction2=_faction_ids(teams, "faction2"),
            winner=winner if isinstance(winner, str) else None,
        )


class MatchDetail(BaseModel):
    """Per-player counters from /matches/{id}/stats."""

    match_id: str
    kills: int = Field(default=0, ge=0)
    deaths: int = Field(default=0, ge=0)
    headshots: int = Field(default=0, ge=0)
    won: bool = False

    @classmethod
    def from_api(cls, match_id: str, data: dict, player_id: str) -> "MatchDetail":
        rounds = data.get("rounds")
        if not isinstance(rounds, list) or not rounds or not isinstance(rounds[0], dict):
            raise MalformedResponseError(f"match {match_id} has no rounds")

        for team in _dicts(rounds[0].get("teams")):
            for player in _dicts(team.get("players")):
                if player.get("player_id") != player_id:
                    continue
                stats = player.get("player_stats")
                if not isinstance(stats, dict):
                    raise MalformedResponseError(f"match {match_id} has no stats for {player_id}")
                try:
                    return cls(
                        match_id=match_id,
                        kills=int(float(stats.get("Kills") or 0)),
                        deaths=int(float(stats.get("Deaths") or 0)),
                        headshots=int(float(stats.get("Headshots") or 0)),
                        won=str(stats.get("Result") or "0") == "1",
                    )
                except (TypeError, ValueError) as e:
                    raise MalformedResponseError(f"match {match_id}: {e}") from e

        raise MalformedResponseError(f"player {player_id} not in match {match_id}")


def parse_history(payload: dict) -> list[MatchSummary]:
    items = payload.get("items")
    if items is None:
        raise MalformedResponseError("history payload without items")
    if not isinstance(items, list):
        raise MalformedResponseError("history items is not a list")

    matches = []
    for item in _dicts(items):
        try:
            match = MatchSummary.from_api(item)
        except ValidationError:
            # e.g. a non-numeric started_at; the rest of the history is still usable
            continue
        if match is not None:
            matches.append(match)
    return matches
