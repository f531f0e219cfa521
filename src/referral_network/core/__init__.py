from .exceptions import (
    ConfigError,
    PipelineError,
    RecordLoadError,
    ReferralNetworkError,
    SponsorCycleError,
)

__all__ = [
    "ConfigError",
    "PipelineError",
    "RecordLoadError",
    "ReferralNetworkError",
    "SponsorCycleError",
]
