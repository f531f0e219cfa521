"""
Referral network tree engine.

    raw records -> normalize_records -> build_forest
        -> filter_forest -> aggregate
        -> spotlight_search
"""

from referral_network.core.exceptions import (
    ConfigError,
    PipelineError,
    RecordLoadError,
    ReferralNetworkError,
    SponsorCycleError,
)
from referral_network.filters import DateRange, FilterCriteria, FilterMode, filter_forest
from referral_network.forest import Forest, TreeNode, build_forest
from referral_network.records import NetworkMember, normalize_record, normalize_records
from referral_network.search import SearchResult, spotlight_search
from referral_network.stats import NetworkStats, aggregate
from referral_network.view import ExpansionState

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DateRange",
    "ExpansionState",
    "FilterCriteria",
    "FilterMode",
    "Forest",
    "NetworkMember",
    "NetworkStats",
    "PipelineError",
    "RecordLoadError",
    "ReferralNetworkError",
    "SearchResult",
    "SponsorCycleError",
    "TreeNode",
    "aggregate",
    "build_forest",
    "filter_forest",
    "normalize_record",
    "normalize_records",
    "spotlight_search",
]
