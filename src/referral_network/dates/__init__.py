from .normalizer import (
    EPOCH,
    day_end,
    day_start,
    local_day,
    parse_day,
    parse_join_date,
    resolve_timezone,
)

__all__ = [
    "EPOCH",
    "day_end",
    "day_start",
    "local_day",
    "parse_day",
    "parse_join_date",
    "resolve_timezone",
]
