from typing import List, Sequence


class ReferralNetworkError(Exception):
    """Base exception for the referral network engine."""


class ConfigError(ReferralNetworkError):
    """Raised when a configuration value is not recognised."""


class RecordLoadError(ReferralNetworkError):
    """Raised when a record file cannot be read or decoded."""


class SponsorCycleError(ReferralNetworkError):
    """Raised when sponsor links form a cycle and the policy is ``error``."""

    def __init__(self, keys: Sequence[str]):
        self.keys: List[str] = list(keys)
        super().__init__(f"Sponsor cycle detected: {' -> '.join(self.keys)}")


class PipelineError(ReferralNetworkError):
    """Raised when the network pipeline fails."""
