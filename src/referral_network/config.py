import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "referral_network.yml"
CONFIG_ENV_VAR = "REFERRAL_NETWORK_CONFIG"

DEFAULT_TIERS = ["BEGINNER", "BRONZE", "SILVER", "GOLD", "DIAMOND"]


class RNConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.members = data.get("members", {}) or {}
        self.forest = data.get("forest", {}) or {}
        self.filters = data.get("filters", {}) or {}
        self.dates = data.get("dates", {}) or {}
        self.debug = data.get("debug", False)

    @property
    def tiers(self) -> list:
        """Tier labels ordered lowest first, upper-cased."""
        tiers = self.members.get("tiers") or DEFAULT_TIERS
        return [str(t).strip().upper() for t in tiers if str(t).strip()]

    @property
    def default_tier(self) -> str:
        tiers = self.tiers
        return tiers[0] if tiers else ""

    @property
    def default_status(self) -> str:
        return str(self.members.get("default_status", "UNKNOWN")).upper()

    @property
    def cycle_policy(self) -> str:
        return str(self.forest.get("cycle_policy", "break")).lower()

    @property
    def default_filter_mode(self) -> str:
        return str(self.filters.get("default_mode", "strict")).lower()

    @property
    def timezone(self) -> str:
        return str(self.dates.get("timezone", "UTC"))


def _resolve_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config() -> 'RNConfig':
    path = _resolve_config_path()

    if not path.exists():
        if path != CONFIG_PATH:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Installed without the repository checkout: run on built-in defaults
        return RNConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return RNConfig(data)

_config_cache = None

def get_config() -> 'RNConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    """Drop the cached config so the next ``get_config`` re-reads the file."""
    global _config_cache
    _config_cache = None
