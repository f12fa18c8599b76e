from collections import OrderedDict
from time import time
from typing import Optional

from pydantic import BaseModel

from app.models.faceit.TodayMode import TodayMode

SessionKey = tuple[str, Optional[TodayMode]]


class EloSession(BaseModel):
    session_start: int
    initial_elo: int
    created_at: float


class SessionEloCache:
    """
    Remembers the rating a player had when the current window started.

    The first request in a window can only estimate the baseline; every later
    request in the same window reuses it, so the delta follows the real rating.
    Baselines are kept per (player, today mode): a calendar day and a session
    start at different matches and must not evict each other.
    """

    def __init__(self, maxsize: int = 512):
        self.maxsize = maxsize
        self._sessions: "OrderedDict[SessionKey, EloSession]" = OrderedDict()

    def get_session(
        self, player_id: str, session_start: int, mode: Optional[TodayMode] = None
    ) -> Optional[EloSession]:
        key = (player_id, mode)
        session = self._sessions.get(key)
        if session is None:
            return None

        if session.session_start == session_start:
            self._sessions.move_to_end(key)
            return session

        # a new window has started, the old baseline is useless
        del self._sessions[key]
        return None

    def set_session(
        self,
        player_id: str,
        session_start: int,
        initial_elo: int,
        mode: Optional[TodayMode] = None,
    ) -> EloSession:
        key = (player_id, mode)
        session = EloSession(
            session_start=session_start, initial_elo=initial_elo, created_at=time()
        )
        self._sessions[key] = session
        self._sessions.move_to_end(key)
        while len(self._sessions) > self.maxsize:
            self._sessions.popitem(last=False)
        return session

    def clear_session(self, player_id: str) -> None:
        """Drop every baseline of player_id, whatever the mode."""
        for key in [k for k in self._sessions if k[0] == player_id]:
            del self._sessions[key]
