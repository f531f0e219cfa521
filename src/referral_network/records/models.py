from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

MemberId = Union[str, int]


@dataclass(slots=True)
class NetworkMember:
    """
    Canonical per-user record consumed by the forest builder.

    ``code`` is the linkage key; ``sponsor_code`` points at another member's
    ``code``. Every field is populated by the normalizer, so consumers never
    have to guard against missing attributes.
    """
    id: MemberId
    code: str = ""
    sponsor_code: str = ""
    sponsor_order: int = 0

    # Display
    name: str = ""
    email: str = ""
    phone: str = ""

    # Business
    tier: str = ""
    level: str = ""
    referrals: int = 0
    earnings: float = 0.0
    wallet_balance: float = 0.0
    status: str = ""
    join_date: Optional[datetime] = None

    # Classification
    network_id: Optional[str] = None
    network_name: str = ""
    network_color: str = ""

    # Derived by the forest builder (cleared and recomputed on every build)
    is_orphaned: bool = False
    is_cyclic: bool = False

    # Original record, untouched
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_root_user(self) -> bool:
        return not self.sponsor_code

    @property
    def is_active(self) -> bool:
        return self.status.upper() == "ACTIVE"
