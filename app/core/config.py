import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.faceit.TodayMode import EloMode, TodayMode


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    faceit_key: Optional[str] = None
    faceit_base_url: str = "https://open.faceit.com/data/v4"
    game: str = "cs2"
    default_player: str = "togs"

    cache_ttl_ms: int = Field(default=30_000, ge=0)
    cache_max_entries: int = Field(default=512, ge=1)
    request_timeout: float = Field(default=4.0, gt=0)

    elo_mode: EloMode = EloMode.TODAY
    today_mode: TodayMode = TodayMode.CALENDAR
    today_tz: str = "America/Sao_Paulo"
    day_start_hour: int = Field(default=7, ge=0, le=23)
    session_gap_hours: float = Field(default=8, gt=0)
    elo_per_match: int = Field(default=25, ge=0)

    port: int = 3000
    log_level: str = "INFO"

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_ms / 1000

    @property
    def session_gap_seconds(self) -> float:
        return self.session_gap_hours * 3600

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment (after load_dotenv)."""
        env = os.environ
        values = {
            "faceit_key": env.get("FACEIT_KEY"),
            "faceit_base_url": env.get("FACEIT_BASE_URL"),
            "game": env.get("FACEIT_GAME"),
            # trimmed, but case is kept; the resolver tries casings itself
            "default_player": (env.get("PLAYER_NICKNAME") or "").strip() or None,
            "cache_ttl_ms": env.get("CACHE_TTL_MS"),
            "cache_max_entries": env.get("CACHE_MAX_ENTRIES"),
            "request_timeout": env.get("REQUEST_TIMEOUT_SECONDS"),
            "elo_mode": env.get("ELO_MODE"),
            "today_mode": env.get("TODAY_MODE"),
            "today_tz": env.get("TODAY_TZ"),
            "day_start_hour": env.get("DAY_START_HOUR"),
            "session_gap_hours": env.get("SESSION_GAP_HOURS"),
            "elo_per_match": env.get("ELO_PER_MATCH"),
            "port": env.get("PORT"),
            "log_level": env.get("LOG_LEVEL"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})

    def validate_required(self) -> None:
        missing = [
            env_name
            for env_name, value in (("FACEIT_KEY", self.faceit_key),)
            if not value
        ]
        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
