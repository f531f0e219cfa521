from .criteria import DateRange, FilterCriteria, FilterMode, level_number
from .engine import filter_forest, filter_lineage, filter_network, filter_strict

__all__ = [
    "DateRange",
    "FilterCriteria",
    "FilterMode",
    "filter_forest",
    "filter_lineage",
    "filter_network",
    "filter_strict",
    "level_number",
]
