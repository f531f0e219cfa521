from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from referral_network.forest.node import TreeNode
from referral_network.forest.traversal import walk


@dataclass(frozen=True, slots=True)
class NetworkStats:
    """
    Fixed-shape summary of a (sub-)forest.

    ``active_levels`` is the deepest level present, roots being level 1.
    """
    total_users: int = 0
    total_earnings: float = 0.0
    total_wallet_balance: float = 0.0
    active_users: int = 0
    active_levels: int = 0
    total_referrals: int = 0
    average_earnings: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        """camelCase keys, as consumed by the dashboard."""
        return {
            "totalUsers": self.total_users,
            "totalEarnings": self.total_earnings,
            "totalWalletBalance": self.total_wallet_balance,
            "activeUsers": self.active_users,
            "activeLevels": self.active_levels,
            "totalReferrals": self.total_referrals,
            "averageEarnings": self.average_earnings,
        }


def aggregate(roots: Iterable[TreeNode]) -> NetworkStats:
    """
    Walk every node reachable from ``roots`` once and summarise it.

    Works on any forest: the full build, a filtered view, or a flat list of
    search hits (nodes repeated through an ancestor are counted once).
    """
    users = 0
    earnings = 0.0
    wallet = 0.0
    active = 0
    referrals = 0
    depth = 0

    for node, level in walk(roots):
        member = node.user
        users += 1
        earnings += member.earnings
        wallet += member.wallet_balance
        referrals += member.referrals
        if member.is_active:
            active += 1
        depth = max(depth, level)

    return NetworkStats(
        total_users=users,
        total_earnings=earnings,
        total_wallet_balance=wallet,
        active_users=active,
        active_levels=depth,
        total_referrals=referrals,
        average_earnings=earnings / users if users else 0.0,
    )
