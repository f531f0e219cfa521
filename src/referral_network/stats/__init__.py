from .aggregator import NetworkStats, aggregate

__all__ = ["NetworkStats", "aggregate"]
