import enum


class EloMode(str, enum.Enum):
    PLAIN = "plain"  # rating only
    TODAY = "today"  # rating plus today's win/loss


class TodayMode(str, enum.Enum):
    CALENDAR = "calendar"  # local midnight
    CLOCK = "clock"  # local DAY_START_HOUR
    SESSION = "session"  # rolling gap between matches


class StatsPeriod(str, enum.Enum):
    LIFETIME = "lifetime"
    RECENT = "recent"


class StreakOrder(str, enum.Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
