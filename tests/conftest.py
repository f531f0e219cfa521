import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from referral_network.forest import build_forest  # noqa: E402
from referral_network.records import normalize_records  # noqa: E402


def forest_of(*records, cycle_policy=None):
    """Normalize raw dict records and build a forest."""
    return build_forest(normalize_records(list(records)), cycle_policy=cycle_policy)


@pytest.fixture
def make_forest():
    return forest_of


@pytest.fixture
def sample_records():
    """
    Two networks plus an orphan:

        R (Root, ACTIVE, GOLD)
        ├── X (Xena, ACTIVE, SILVER)
        ├── Y (Yuri, PENDING, BRONZE)
        │   └── Z (Zoe, ACTIVE, SILVER)
        └── W (Walt, SUSPENDED, BRONZE)
        Q (Quinn, ACTIVE, BRONZE)
        O (Olga, ACTIVE, SILVER)   sponsor "MISSING"
    """
    return [
        {"id": 1, "referenceCode": "R", "name": "Root", "status": "ACTIVE", "tier": "GOLD",
         "level": "Level 3", "earnings": 1000, "walletBalance": 400, "referralCount": 3,
         "createdAt": "2024-01-01T09:00:00Z", "networkId": "north"},
        {"id": 2, "referenceCode": "X", "referredByCode": "R", "name": "Xena", "status": "ACTIVE",
         "tier": "SILVER", "level": "Level 2", "earnings": 300, "walletBalance": 100,
         "referralCount": 0, "createdAt": "2024-01-15T23:30:00Z", "networkId": "north"},
        {"id": 3, "referenceCode": "Y", "referredByCode": "R", "name": "Yuri", "status": "PENDING",
         "tier": "BRONZE", "level": "Level 1", "earnings": 50, "referralCount": 1,
         "createdAt": "2024-02-01T12:00:00Z", "networkId": "north"},
        {"id": 4, "referenceCode": "Z", "referredByCode": "Y", "name": "Zoe", "status": "ACTIVE",
         "tier": "SILVER", "level": "Level 2", "earnings": 200, "referralCount": 0,
         "createdAt": "2024-03-10T08:00:00Z", "networkId": "north"},
        {"id": 5, "referenceCode": "W", "referredByCode": "R", "name": "Walt", "status": "SUSPENDED",
         "tier": "BRONZE", "level": "Level 1", "earnings": 0, "referralCount": 0,
         "networkId": "north"},
        {"id": 6, "referenceCode": "Q", "name": "Quinn", "status": "ACTIVE", "tier": "BRONZE",
         "level": "Level 1", "earnings": 10, "referralCount": 0,
         "createdAt": "2023-12-31T10:00:00Z", "networkId": "south"},
        {"id": 7, "referenceCode": "O", "referredByCode": "MISSING", "name": "Olga", "status": "ACTIVE",
         "tier": "SILVER", "level": "Level 2", "earnings": 70, "referralCount": 2,
         "createdAt": "2024-01-20T10:00:00Z", "networkId": "east"},
    ]


@pytest.fixture
def sample_forest(sample_records):
    return forest_of(*sample_records)
