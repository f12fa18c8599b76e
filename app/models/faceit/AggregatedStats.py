from pydantic import BaseModel, Field


class AggregatedStats(BaseModel):
    """Summary reduced from a set of matches. Zero-valued when there are none."""

    matches: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    rating_delta: int = 0
    average_kills: float = Field(default=0, ge=0)
    kd_ratio: float = Field(default=0, ge=0)
    headshot_pct: float = Field(default=0, ge=0, le=100)
    win_rate: float = Field(default=0, ge=0, le=100)
    skipped: int = Field(default=0, ge=0, description="Matches without retrievable detail")
