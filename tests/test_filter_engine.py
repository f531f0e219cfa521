# tests/test_filter_engine.py

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from referral_network.core.exceptions import ConfigError
from referral_network.filters import DateRange, FilterCriteria, FilterMode, filter_forest
from referral_network.forest import collect_keys

from conftest import forest_of

ALL_MODES = [FilterMode.STRICT, FilterMode.NETWORK, FilterMode.LINEAGE]


def _keys(roots):
    return [r.key for r in roots]


def _shape(roots):
    return [(n.key, _shape(n.children)) for n in roots]


# ---------------------------------------------------------------------------
# No-op filter
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("mode", ALL_MODES)
def test_inactive_criteria_is_identity(sample_forest, mode):
    roots = sample_forest.roots
    out = filter_forest(roots, FilterCriteria(), mode)

    assert out is not roots
    assert len(out) == len(roots)
    assert all(a is b for a, b in zip(out, roots))


def test_none_criteria_is_identity(sample_forest):
    out = filter_forest(sample_forest.roots, None, "network")
    assert all(a is b for a, b in zip(out, sample_forest.roots))


# ---------------------------------------------------------------------------
# Strict
# ---------------------------------------------------------------------------

def test_strict_chain_keeps_matching_middle_with_unfiltered_subtree():
    forest = forest_of(
        {"code": "A", "name": "A", "tier": "GOLD"},
        {"code": "B", "sponsorCode": "A", "name": "B", "tier": "SILVER"},
        {"code": "C", "sponsorCode": "B", "name": "C", "tier": "GOLD"},
    )

    out = filter_forest(forest.roots, FilterCriteria(tiers={"SILVER"}), FilterMode.STRICT)

    assert _keys(out) == ["B"]
    assert out[0] is forest.index["B"]
    assert _keys(out[0].children) == ["C"]


def test_strict_promotes_descendants_of_elided_nodes(sample_forest):
    out = filter_forest(sample_forest.roots, FilterCriteria(statuses={"active"}), "strict")

    # Olga and Quinn are active roots; Root is active too and keeps its
    # whole subtree, including the pending and suspended members.
    assert _keys(out) == ["O", "Q", "R"]
    assert _shape([out[2]]) == [("R", [("W", []), ("X", []), ("Y", [("Z", [])])])]


def test_strict_elided_root_hands_its_level_to_matching_descendants(sample_forest):
    out = filter_forest(sample_forest.roots, FilterCriteria(tiers={"silver"}), "strict")
    assert _keys(out) == ["O", "X", "Z"]


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

def test_network_keeps_whole_tree_when_any_member_matches(sample_forest):
    out = filter_forest(sample_forest.roots, FilterCriteria(min_earnings=150, max_earnings=250), "network")

    # Only Zoe (200) matches; her entire network survives untouched.
    assert _keys(out) == ["R"]
    assert out[0] is sample_forest.index["R"]
    assert len(out[0].children) == 3


def test_network_drops_trees_without_matches(sample_forest):
    out = filter_forest(sample_forest.roots, FilterCriteria(networks={"east"}), "network")
    assert _keys(out) == ["O"]


# ---------------------------------------------------------------------------
# Lineage
# ---------------------------------------------------------------------------

def test_lineage_keeps_bridges_and_prunes_dead_branches(sample_forest):
    out = filter_forest(sample_forest.roots, FilterCriteria(levels=["Level 2"]), "lineage")

    assert _shape(out) == [
        ("O", []),
        ("R", [("X", []), ("Y", [("Z", [])])]),
    ]
    # New nodes; the base forest is untouched
    assert out[1] is not sample_forest.index["R"]
    assert out[1].user is sample_forest.index["R"].user
    assert len(sample_forest.index["R"].children) == 3


# ---------------------------------------------------------------------------
# Cross-mode properties
# ---------------------------------------------------------------------------

def _wide_forest():
    tiers = ["BRONZE", "SILVER", "GOLD", "DIAMOND"]
    statuses = ["ACTIVE", "PENDING", "SUSPENDED"]
    records = []
    for i in range(40):
        rec = {
            "code": f"M{i}",
            "name": f"Member {i:02d}",
            "tier": tiers[(i * 7) % 4],
            "status": statuses[(i * 5) % 3],
            "earnings": (i * 37) % 500,
            "referralCount": i % 6,
        }
        if i % 9 != 0:
            rec["sponsorCode"] = f"M{(i - 1) // 2}" if i % 13 else "GONE"
        records.append(rec)
    return forest_of(*records)


@pytest.mark.parametrize(
    "criteria",
    [
        FilterCriteria(tiers={"GOLD"}),
        FilterCriteria(statuses={"PENDING"}, min_earnings=100),
        FilterCriteria(tiers={"DIAMOND", "BRONZE"}, max_referrals=2),
        FilterCriteria(min_earnings=450),
    ],
)
def test_network_is_superset_of_strict_and_lineage(criteria):
    forest = _wide_forest()
    strict = collect_keys(filter_forest(forest.roots, criteria, "strict"))
    network = collect_keys(filter_forest(forest.roots, criteria, "network"))
    lineage = collect_keys(filter_forest(forest.roots, criteria, "lineage"))

    assert strict <= network
    assert lineage <= network


@pytest.mark.parametrize("mode", ALL_MODES)
def test_filtering_never_mutates_input(sample_forest, mode):
    before = _shape(sample_forest.roots)
    filter_forest(sample_forest.roots, FilterCriteria(tiers={"BRONZE"}), mode)
    assert _shape(sample_forest.roots) == before


def test_unknown_mode_is_rejected(sample_forest):
    with pytest.raises(ConfigError):
        filter_forest(sample_forest.roots, FilterCriteria(tiers={"GOLD"}), "fuzzy")


# ---------------------------------------------------------------------------
# Criteria semantics (flat forest: every member is a root)
# ---------------------------------------------------------------------------

def _flat(*records):
    return forest_of(*records).roots


def _matching(roots, criteria):
    return sorted(_keys(filter_forest(roots, criteria, "strict")))


def test_and_across_categories_or_within():
    roots = _flat(
        {"code": "A", "tier": "GOLD", "status": "ACTIVE"},
        {"code": "B", "tier": "SILVER", "status": "ACTIVE"},
        {"code": "C", "tier": "GOLD", "status": "PENDING"},
        {"code": "D", "tier": "BRONZE", "status": "ACTIVE"},
    )

    assert _matching(roots, FilterCriteria(tiers={"gold", "silver"})) == ["A", "B", "C"]
    assert _matching(roots, FilterCriteria(tiers={"gold", "silver"}, statuses={"active"})) == ["A", "B"]


def test_numeric_bounds_are_inclusive():
    roots = _flat(
        {"code": "A", "earnings": 100, "referrals": 1},
        {"code": "B", "earnings": 200, "referrals": 5},
        {"code": "C", "earnings": 300, "referrals": 9},
    )

    assert _matching(roots, FilterCriteria(min_earnings=200)) == ["B", "C"]
    assert _matching(roots, FilterCriteria(max_earnings=200)) == ["A", "B"]
    assert _matching(roots, FilterCriteria(min_referrals=5, max_referrals=5)) == ["B"]


def test_level_matching_uses_level_number():
    roots = _flat(
        {"code": "A", "level": "Level 1"},
        {"code": "B", "level": "Level 2"},
        {"code": "C", "level": "2"},
        {"code": "D", "level": ""},
    )

    assert _matching(roots, FilterCriteria(levels=["Level 2"])) == ["B", "C"]
    assert _matching(roots, FilterCriteria(levels=[2])) == ["B", "C"]


def test_date_bounds_cover_whole_days():
    roots = _flat(
        {"code": "A", "createdAt": "2024-01-15T00:00:00Z"},
        {"code": "B", "createdAt": "2024-01-15T23:30:00Z"},
        {"code": "C", "createdAt": "2024-01-16T00:00:01Z"},
        {"code": "N"},
    )

    one_day = FilterCriteria(date_range=DateRange(start=date(2024, 1, 15), end=date(2024, 1, 15)))
    assert _matching(roots, one_day) == ["A", "B"]


def test_missing_join_date_compares_as_epoch():
    roots = _flat(
        {"code": "A", "createdAt": "2024-01-15T10:00:00Z"},
        {"code": "N"},
    )

    assert _matching(roots, FilterCriteria(date_range=DateRange(end=date(2024, 12, 31)))) == ["A", "N"]
    assert _matching(roots, FilterCriteria(date_range=DateRange(start=date(2024, 1, 1)))) == ["A"]


def test_datetime_bounds_are_exact():
    roots = _flat(
        {"code": "A", "createdAt": "2024-01-15T10:00:00Z"},
        {"code": "B", "createdAt": "2024-01-15T12:00:00Z"},
    )
    start = datetime(2024, 1, 15, 11, 0, tzinfo=timezone.utc)
    assert _matching(roots, FilterCriteria(date_range=DateRange(start=start))) == ["B"]


def test_join_dates_select_calendar_days():
    roots = _flat(
        {"code": "A", "createdAt": "2024-01-15T10:00:00Z"},
        {"code": "B", "createdAt": "2024-01-16T10:00:00Z"},
        {"code": "N"},
    )
    assert _matching(roots, FilterCriteria(join_dates={"2024-01-16"})) == ["B"]


def test_criteria_from_mapping():
    criteria = FilterCriteria.from_mapping(
        {
            "tiers": ["gold"],
            "status": "active",
            "minEarnings": "100",
            "maxReferrals": 4,
            "dateRange": {"start": "2024-01-01", "end": "2024-01-31"},
        }
    )

    assert criteria.tiers == frozenset({"GOLD"})
    assert criteria.statuses == frozenset({"ACTIVE"})
    assert criteria.min_earnings == 100.0
    assert criteria.max_referrals == 4
    assert criteria.date_range.start == date(2024, 1, 1)
    assert criteria.date_range.end == date(2024, 1, 31)
    assert criteria.is_active


@pytest.mark.parametrize(
    "data",
    [{"minEarnings": "lots"}, {"max_referrals": "a few"}, {"minReferrals": [3]}],
)
def test_non_numeric_bounds_are_rejected(data):
    with pytest.raises(ConfigError, match="filter value"):
        FilterCriteria.from_mapping(data)


def test_empty_mapping_is_inactive():
    assert not FilterCriteria.from_mapping({}).is_active
    assert not FilterCriteria.from_mapping({"dateRange": {"start": None, "end": ""}}).is_active


def test_mapping_criteria_accepted_by_filter(sample_forest):
    out = filter_forest(sample_forest.roots, {"networks": ["south"]}, "strict")
    assert _keys(out) == ["Q"]
