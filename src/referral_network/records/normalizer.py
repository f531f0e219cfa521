"""
Record normalization: loosely-typed API user records -> NetworkMember.

The upstream REST API has used several names for the same field across
endpoints (``referenceCode`` vs ``code``, ``referredByCode`` vs
``sponsorCode``, ...). Each canonical field lists its aliases in priority
order; camelCase and snake_case spellings are both accepted.

Nothing here raises on bad data. Missing or malformed values degrade to the
documented defaults, and records missing both ``id`` and ``code`` are kept
with a best-effort identity.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from referral_network.config import RNConfig, get_config
from referral_network.dates import parse_join_date, resolve_timezone
from referral_network.logging import get_logger
from referral_network.records.models import MemberId, NetworkMember

log = get_logger("normalizer")


# ---------------------------------------------------------------------------
# Field aliases (priority order)
# ---------------------------------------------------------------------------

ID_ALIASES: Tuple[str, ...] = ("id", "_id", "referenceCode", "code")
CODE_ALIASES: Tuple[str, ...] = ("referenceCode", "code")
SPONSOR_ALIASES: Tuple[str, ...] = ("referredByCode", "sponsorCode")
SPONSOR_ORDER_ALIASES: Tuple[str, ...] = ("sponsorOrder",)
NAME_ALIASES: Tuple[str, ...] = ("name",)
EMAIL_ALIASES: Tuple[str, ...] = ("email",)
PHONE_ALIASES: Tuple[str, ...] = ("phoneNumber", "phone")
TIER_ALIASES: Tuple[str, ...] = ("tier",)
LEVEL_ALIASES: Tuple[str, ...] = ("level",)
REFERRAL_ALIASES: Tuple[str, ...] = ("referralCount", "referrals")
EARNINGS_ALIASES: Tuple[str, ...] = ("earnings", "totalEarnings", "walletBalance")
WALLET_ALIASES: Tuple[str, ...] = ("walletBalance",)
STATUS_ALIASES: Tuple[str, ...] = ("status",)
JOIN_DATE_ALIASES: Tuple[str, ...] = ("createdAt", "joinDate")
NETWORK_ID_ALIASES: Tuple[str, ...] = ("networkId",)
NETWORK_NAME_ALIASES: Tuple[str, ...] = ("networkName",)
NETWORK_COLOR_ALIASES: Tuple[str, ...] = ("networkColor",)

# Placeholder values the user table writes for "no sponsor".
EMPTY_CODE_MARKERS = {"", "--", "-", "null", "none", "n/a"}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def _first(raw: Mapping[str, Any], aliases: Iterable[str]) -> Any:
    """Return the first alias value that is present and not None."""
    for alias in aliases:
        for key in (alias, _snake(alias)):
            value = raw.get(key)
            if value is not None:
                return value
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _code(value: Any) -> str:
    s = _text(value)
    return "" if s.lower() in EMPTY_CODE_MARKERS else s


def _number(value: Any) -> float:
    """Lenient numeric coercion: ``"1,200.50"`` -> 1200.5, junk -> 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        s = _text(value).replace(",", "").replace("_", "")
        if not s:
            return 0.0
        try:
            result = float(s)
        except ValueError:
            return 0.0
    if result != result or result in (float("inf"), float("-inf")):
        return 0.0
    return result


def _non_negative(value: Any) -> float:
    return max(_number(value), 0.0)


def _integer(value: Any) -> int:
    return int(_number(value))


def _identity(raw: Mapping[str, Any], code: str, index: int) -> MemberId:
    value = _first(raw, ID_ALIASES)
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        if isinstance(value, int) or value.strip():
            return value.strip() if isinstance(value, str) else value
    return code or f"record-{index}"


def _optional_text(value: Any) -> Optional[str]:
    s = _text(value)
    return s or None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_record(
    raw: Mapping[str, Any],
    *,
    index: int = 0,
    config: Optional[RNConfig] = None,
) -> NetworkMember:
    """
    Map one raw user record onto a NetworkMember.

    Args:
        raw: a JSON-like mapping from the users endpoint.
        index: position in the source collection, used as fallback identity.
        config: optional config override (defaults to ``get_config()``).
    """
    cfg = config or get_config()
    tz = resolve_timezone(cfg.timezone)

    code = _code(_first(raw, CODE_ALIASES))
    tier = _text(_first(raw, TIER_ALIASES)).upper() or cfg.default_tier
    status = _text(_first(raw, STATUS_ALIASES)).upper() or cfg.default_status

    member = NetworkMember(
        id=_identity(raw, code, index),
        code=code,
        sponsor_code=_code(_first(raw, SPONSOR_ALIASES)),
        sponsor_order=_integer(_first(raw, SPONSOR_ORDER_ALIASES)),
        name=_text(_first(raw, NAME_ALIASES)),
        email=_text(_first(raw, EMAIL_ALIASES)),
        phone=_text(_first(raw, PHONE_ALIASES)),
        tier=tier,
        level=_text(_first(raw, LEVEL_ALIASES)),
        referrals=max(_integer(_first(raw, REFERRAL_ALIASES)), 0),
        earnings=_non_negative(_first(raw, EARNINGS_ALIASES)),
        wallet_balance=_non_negative(_first(raw, WALLET_ALIASES)),
        status=status,
        join_date=parse_join_date(_first(raw, JOIN_DATE_ALIASES), tz),
        network_id=_optional_text(_first(raw, NETWORK_ID_ALIASES)),
        network_name=_text(_first(raw, NETWORK_NAME_ALIASES)),
        network_color=_text(_first(raw, NETWORK_COLOR_ALIASES)),
        raw=dict(raw),
    )

    if not code:
        log.debug("Record %d has no code; kept with identity %r", index, member.id)

    return member


def normalize_records(
    raw_records: Any,
    *,
    config: Optional[RNConfig] = None,
) -> List[NetworkMember]:
    """
    Normalize a collection of raw records.

    Non-list input yields an empty list; non-mapping entries are skipped
    with a warning. Order is preserved.
    """
    if not isinstance(raw_records, (list, tuple)):
        if raw_records is not None:
            log.warning(
                "Expected a list of user records, got %s; treating as empty",
                type(raw_records).__name__,
            )
        return []

    members: List[NetworkMember] = []
    skipped = 0

    for index, raw in enumerate(raw_records):
        if not isinstance(raw, Mapping):
            skipped += 1
            continue
        members.append(normalize_record(raw, index=index, config=config))

    if skipped:
        log.warning("Skipped %d non-object user records", skipped)

    log.info("Normalized %d user records", len(members))
    return members


def member_to_record(member: NetworkMember) -> Dict[str, Any]:
    """
    Reverse mapping onto the camelCase output-boundary shape.
    """
    return {
        "id": member.id,
        "code": member.code,
        "sponsorCode": member.sponsor_code,
        "sponsorOrder": member.sponsor_order,
        "name": member.name,
        "email": member.email,
        "phone": member.phone,
        "tier": member.tier,
        "level": member.level,
        "referrals": member.referrals,
        "earnings": member.earnings,
        "walletBalance": member.wallet_balance,
        "status": member.status,
        "joinDate": member.join_date.isoformat() if member.join_date else None,
        "networkId": member.network_id,
        "networkName": member.network_name,
        "networkColor": member.network_color,
        "isRootUser": member.is_root_user,
        "isOrphaned": member.is_orphaned,
        "isCyclic": member.is_cyclic,
    }
