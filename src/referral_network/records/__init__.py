"""
Public interface for raw-record handling.

    from referral_network.records import (
        NetworkMember,
        normalize_record,
        normalize_records,
        load_records,
    )
"""

from __future__ import annotations

from .loader import load_records, unwrap_records
from .models import MemberId, NetworkMember
from .normalizer import member_to_record, normalize_record, normalize_records

__all__ = [
    "MemberId",
    "NetworkMember",
    "load_records",
    "member_to_record",
    "normalize_record",
    "normalize_records",
    "unwrap_records",
]
