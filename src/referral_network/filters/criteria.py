"""
Filter criteria and the per-member predicate.

A member matches when it satisfies every active category (AND across
categories) and any one value inside a multi-value category (OR within
``tiers``, ``statuses``, ``networks``, ``levels``, ``join_dates``). Empty
sets and ``None`` bounds mean "no restriction".
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Union

from referral_network.config import get_config
from referral_network.core.exceptions import ConfigError
from referral_network.dates import (
    EPOCH,
    day_end,
    day_start,
    local_day,
    parse_day,
    parse_join_date,
    resolve_timezone,
)
from referral_network.records.models import NetworkMember

Bound = Union[date, datetime, None]

_LEVEL_NUMBER = re.compile(r"(\d+)")


class FilterMode(str, Enum):
    STRICT = "strict"
    NETWORK = "network"
    LINEAGE = "lineage"

    @classmethod
    def parse(cls, value: Union[str, "FilterMode", None]) -> "FilterMode":
        if value is None:
            value = get_config().default_filter_mode
        if isinstance(value, FilterMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ConfigError(f"Unknown filter mode {value!r}; expected one of {choices}") from None


def level_number(value: Any) -> Optional[int]:
    """``"Level 1"`` -> 1, ``"1"`` -> 1, ``1`` -> 1, junk/None -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    m = _LEVEL_NUMBER.search(str(value))
    return int(m.group(1)) if m else None


def _upper_set(values: Optional[Iterable[Any]]) -> FrozenSet[str]:
    return frozenset(str(v).strip().upper() for v in (values or ()) if str(v).strip())


def _text_set(values: Optional[Iterable[Any]]) -> FrozenSet[str]:
    return frozenset(str(v).strip() for v in (values or ()) if str(v).strip())


def _level_set(values: Optional[Iterable[Any]]) -> FrozenSet[int]:
    numbers = (level_number(v) for v in (values or ()))
    return frozenset(n for n in numbers if n is not None)


def _day_set(values: Optional[Iterable[Any]]) -> FrozenSet[date]:
    days = (parse_day(v) for v in (values or ()))
    return frozenset(d for d in days if d is not None)


def _bound(value: Any) -> Bound:
    """Keep dates as whole-day bounds; parse anything else as a timestamp."""
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        day = parse_day(value)
        if day is not None:
            return day
    return parse_join_date(value)


@dataclass(frozen=True)
class DateRange:
    """
    Bounds on ``join_date``. Plain ``date`` bounds cover whole days: ``start``
    from 00:00:00 and ``end`` through 23:59:59.999999.
    """
    start: Bound = None
    end: Bound = None

    @property
    def is_active(self) -> bool:
        return self.start is not None or self.end is not None

    def _start_instant(self, tz: tzinfo) -> Optional[datetime]:
        if self.start is None:
            return None
        if isinstance(self.start, datetime):
            return parse_join_date(self.start, tz)
        return day_start(self.start, tz)

    def _end_instant(self, tz: tzinfo) -> Optional[datetime]:
        if self.end is None:
            return None
        if isinstance(self.end, datetime):
            return parse_join_date(self.end, tz)
        return day_end(self.end, tz)

    def contains(self, moment: Optional[datetime], tz: tzinfo) -> bool:
        # Members without a join date compare as the epoch.
        ts = moment or EPOCH
        start = self._start_instant(tz)
        end = self._end_instant(tz)
        if start is not None and ts < start:
            return False
        if end is not None and ts > end:
            return False
        return True


@dataclass
class FilterCriteria:
    tiers: FrozenSet[str] = field(default_factory=frozenset)
    statuses: FrozenSet[str] = field(default_factory=frozenset)
    networks: FrozenSet[str] = field(default_factory=frozenset)
    levels: FrozenSet[int] = field(default_factory=frozenset)
    min_earnings: Optional[float] = None
    max_earnings: Optional[float] = None
    min_referrals: Optional[int] = None
    max_referrals: Optional[int] = None
    date_range: DateRange = field(default_factory=DateRange)
    join_dates: FrozenSet[date] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Tier and status labels compare case-insensitively.
        self.tiers = _upper_set(self.tiers)
        self.statuses = _upper_set(self.statuses)
        self.networks = _text_set(self.networks)
        self.levels = _level_set(self.levels)
        self.join_dates = _day_set(self.join_dates)
        if self.date_range is None:
            self.date_range = DateRange()

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "FilterCriteria":
        """
        Build criteria from a JSON-like mapping (camelCase or snake_case).

        ``dateRange`` may be ``{"start": ..., "end": ...}``; strings of the
        form ``YYYY-MM-DD`` become whole-day bounds. Non-numeric earnings or
        referral bounds raise ``ConfigError``.
        """
        data = data or {}

        def get(*keys: str) -> Any:
            for k in keys:
                if data.get(k) is not None:
                    return data[k]
            return None

        def as_list(value: Any) -> list:
            if value is None:
                return []
            if isinstance(value, (str, int)):
                return [value]
            return list(value)

        raw_range = get("dateRange", "date_range") or {}
        if isinstance(raw_range, DateRange):
            date_range = raw_range
        else:
            date_range = DateRange(
                start=_bound(raw_range.get("start") if raw_range else get("joinedFrom", "joined_from")),
                end=_bound(raw_range.get("end") if raw_range else get("joinedTo", "joined_to")),
            )

        def as_number(name: str, value: Any, kind: type) -> Any:
            if value is None or value == "":
                return None
            try:
                return kind(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid {name} filter value {value!r}") from exc

        return cls(
            tiers=as_list(get("tiers", "tier")),
            statuses=as_list(get("statuses", "status")),
            networks=as_list(get("networks", "networkIds", "network_ids")),
            levels=as_list(get("levels", "level")),
            min_earnings=as_number("minEarnings", get("minEarnings", "min_earnings"), float),
            max_earnings=as_number("maxEarnings", get("maxEarnings", "max_earnings"), float),
            min_referrals=as_number("minReferrals", get("minReferrals", "min_referrals"), int),
            max_referrals=as_number("maxReferrals", get("maxReferrals", "max_referrals"), int),
            date_range=date_range,
            join_dates=as_list(get("joinDates", "join_dates")),
        )

    # ------------------------------------------------------------------ #
    # Predicate
    # ------------------------------------------------------------------ #

    @property
    def is_active(self) -> bool:
        return bool(
            self.tiers
            or self.statuses
            or self.networks
            or self.levels
            or self.join_dates
            or self.min_earnings is not None
            or self.max_earnings is not None
            or self.min_referrals is not None
            or self.max_referrals is not None
            or self.date_range.is_active
        )

    def matches(self, member: NetworkMember, tz: Optional[tzinfo] = None) -> bool:
        tz = tz or resolve_timezone(get_config().timezone)

        if self.tiers and member.tier.upper() not in self.tiers:
            return False

        if self.statuses and member.status.upper() not in self.statuses:
            return False

        if self.networks and (member.network_id or "") not in self.networks:
            return False

        if self.levels and level_number(member.level) not in self.levels:
            return False

        if self.min_earnings is not None and member.earnings < self.min_earnings:
            return False
        if self.max_earnings is not None and member.earnings > self.max_earnings:
            return False

        if self.min_referrals is not None and member.referrals < self.min_referrals:
            return False
        if self.max_referrals is not None and member.referrals > self.max_referrals:
            return False

        if self.date_range.is_active and not self.date_range.contains(member.join_date, tz):
            return False

        if self.join_dates:
            if member.join_date is None or local_day(member.join_date, tz) not in self.join_dates:
                return False

        return True

    def describe(self) -> str:
        """Compact human-readable summary for logs."""
        parts = []
        for name in ("tiers", "statuses", "networks", "levels", "join_dates"):
            values = getattr(self, name)
            if values:
                parts.append(f"{name}={sorted(str(v) for v in values)}")
        for name in ("min_earnings", "max_earnings", "min_referrals", "max_referrals"):
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}={value}")
        if self.date_range.is_active:
            parts.append(f"date_range=[{self.date_range.start}, {self.date_range.end}]")
        return " ".join(parts) or "<none>"
