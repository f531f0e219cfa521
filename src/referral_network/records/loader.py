from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from referral_network.core.exceptions import RecordLoadError
from referral_network.logging import get_logger

log = get_logger("record_loader")

# Envelope keys used by the users endpoint across API versions.
ENVELOPE_KEYS = ("users", "data", "results", "items")


def unwrap_records(payload: Any) -> List[Dict[str, Any]]:
    """
    Return the list of user records inside a decoded JSON payload.

    Accepts a bare list or an object wrapping the list under one of
    ``ENVELOPE_KEYS``.
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            inner = payload.get(key)
            if isinstance(inner, list):
                return inner
            if isinstance(inner, dict):
                return unwrap_records(inner)

    raise RecordLoadError(
        f"Expected a list of user records or an object with one of {ENVELOPE_KEYS}"
    )


def load_records(path: str | Path) -> List[Dict[str, Any]]:
    """
    Read a JSON file of raw user records.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RecordLoadError(f"{path}: invalid JSON ({exc})") from exc
    except OSError as exc:
        raise RecordLoadError(f"{path}: unreadable ({exc})") from exc

    records = unwrap_records(payload)
    log.info("Loaded %d raw records from %s", len(records), path)
    return records
