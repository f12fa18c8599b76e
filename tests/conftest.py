"""Shared fixtures: an in-process fake of the FACEIT Data API behind httpx.MockTransport."""

import asyncio
import re
from datetime import datetime, timezone

import httpx
import pytest

from app.api.faceit_utils.cache import TTLCache
from app.api.faceit_utils.client import FaceitClient
from app.api.faceit_utils.service import FaceitService
from app.api.faceit_utils.session_cache import SessionEloCache
from app.core.config import Settings

BASE_URL = "https://open.faceit.com/data/v4"
PLAYER_ID = "5f0e-togs"
NOW = datetime(2026, 3, 14, 20, 0, tzinfo=timezone.utc)


def player_payload(player_id=PLAYER_ID, nickname="Togs", elo=2150, level=10, game="cs2"):
    games = {game: {"faceit_elo": elo, "skill_level": level}} if elo is not None else {}
    return {"player_id": player_id, "nickname": nickname, "games": games}


def history_item(match_id, won, finished_at, player_id=PLAYER_ID):
    """Player always sits in faction1; winner decides the result."""
    return {
        "match_id": match_id,
        "started_at": finished_at - 2400,
        "finished_at": finished_at,
        "teams": {
            "faction1": {"players": [{"player_id": player_id}, {"player_id": "mate"}]},
            "faction2": {"players": [{"player_id": "enemy-1"}, {"player_id": "enemy-2"}]},
        },
        "results": {"winner": "faction1" if won else "faction2"},
    }


def match_stats_payload(player_id=PLAYER_ID, kills=20, deaths=15, headshots=10, result="1"):
    return {
        "rounds": [
            {
                "teams": [
                    {
                        "players": [
                            {
                                "player_id": player_id,
                                "player_stats": {
                                    "Kills": str(kills),
                                    "Deaths": str(deaths),
                                    "Headshots": str(headshots),
                                    "Result": result,
                                },
                            }
                        ]
                    }
                ]
            }
        ]
    }


class FakeFaceit:
    def __init__(self):
        self.players = {}  # exact nickname -> payload
        self.histories = {}  # player_id -> items, newest first
        self.match_stats = {}  # match_id -> payload
        self.lifetime = {}  # player_id -> payload
        self.slow = {}  # nickname -> seconds to stall
        self.status_override = None
        self.calls = []

    def calls_to(self, prefix):
        return [c for c in self.calls if c.startswith(prefix)]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/data/v4")
        params = request.url.params
        self.calls.append(path)

        if self.status_override:
            return httpx.Response(self.status_override, json={"errors": ["boom"]})

        if path == "/players":
            nickname = params.get("nickname")
            if nickname in self.slow:
                await asyncio.sleep(self.slow[nickname])
            if nickname in self.players:
                return httpx.Response(200, json=self.players[nickname])
            return httpx.Response(404, json={"errors": ["not found"]})

        history = re.fullmatch(r"/players/([^/]+)/history", path)
        if history:
            limit = int(params.get("limit", 20))
            items = self.histories.get(history.group(1), [])
            return httpx.Response(200, json={"items": items[:limit], "start": 0, "end": limit})

        stats = re.fullmatch(r"/players/([^/]+)/stats/([^/]+)", path)
        if stats and stats.group(1) in self.lifetime:
            return httpx.Response(200, json=self.lifetime[stats.group(1)])

        match = re.fullmatch(r"/matches/([^/]+)/stats", path)
        if match and match.group(1) in self.match_stats:
            return httpx.Response(200, json=self.match_stats[match.group(1)])

        return httpx.Response(404, json={"errors": ["not found"]})


@pytest.fixture
def fake():
    faceit = FakeFaceit()
    faceit.players["Togs"] = player_payload()
    return faceit


@pytest.fixture
def settings():
    return Settings(
        faceit_key="test-key",
        default_player="togs",
        today_tz="UTC",
        request_timeout=1.0,
    )


@pytest.fixture
def client(fake, settings):
    return FaceitClient(
        settings.faceit_key,
        base_url=BASE_URL,
        timeout=settings.request_timeout,
        transport=httpx.MockTransport(fake.handler),
    )


@pytest.fixture
def service(client, settings):
    return FaceitService(client, settings, SessionEloCache(), now=lambda: NOW)


@pytest.fixture
def response_cache(settings):
    return TTLCache(settings.cache_ttl_seconds, maxsize=settings.cache_max_entries)
