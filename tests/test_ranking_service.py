"""
tests/test_ranking_service.py

Pytest unit tests for rank_contributors.

All tests are pure Python with in-memory records.

Coverage
--------
- Leaderboard length and gap-free ranks for any record/group count
- Descending counts, first-seen order for ties
- Blank, missing and same-name/different-id groups
- Top-N truncation and empty input
"""

from __future__ import annotations

import pytest

from app.schemas.listing_feed import ListingRecord
from app.services.ranking_service import TOP_AGENT_LIMIT, rank_contributors


def _records(*names: str, agent_id: int = 0) -> list[ListingRecord]:
    return [ListingRecord(agent_id=agent_id, agent_name=name) for name in names]


def _spread(record_count: int, group_count: int) -> list[ListingRecord]:
    """``record_count`` records dealt round-robin over ``group_count`` agents."""
    return [
        ListingRecord(id=str(index), agent_id=index % group_count, agent_name=f"Agent {index % group_count}")
        for index in range(record_count)
    ]


class TestLeaderboardShape:
    @pytest.mark.parametrize(
        "record_count, group_count",
        [
            (1, 1),
            (5, 5),
            (30, 3),
            (30, 10),
            (31, 11),
            (200, 40),
        ],
    )
    def test_length_and_ranks(self, record_count: int, group_count: int) -> None:
        rankings = rank_contributors(_spread(record_count, group_count))

        expected_length = min(group_count, TOP_AGENT_LIMIT)
        assert len(rankings) == expected_length
        assert [ranking.rank for ranking in rankings] == list(range(1, expected_length + 1))

    def test_counts_never_increase_down_the_board(self) -> None:
        records = _records("A", "B", "B", "C", "C", "C", "D", "B", "E", "C", "A")

        rankings = rank_contributors(records)

        counts = [ranking.property_count for ranking in rankings]
        assert counts == sorted(counts, reverse=True)
        assert all(count >= 1 for count in counts)

    def test_empty_input_yields_empty_board(self) -> None:
        assert rank_contributors([]) == []

    def test_accepts_generators(self) -> None:
        rankings = rank_contributors(record for record in _records("A", "A", "B"))

        assert [(r.agent_name, r.property_count) for r in rankings] == [("A", 2), ("B", 1)]


class TestTopTen:
    def test_fifteen_listings_keep_ten_agents(self) -> None:
        names = ["Agent A"] * 3 + ["Agent B"] * 2 + [f"Agent {letter}" for letter in "CDEFGHIJKL"]

        rankings = rank_contributors(_records(*names))

        assert len(rankings) == 10
        assert (rankings[0].agent_name, rankings[0].property_count, rankings[0].rank) == ("Agent A", 3, 1)
        assert (rankings[1].agent_name, rankings[1].property_count, rankings[1].rank) == ("Agent B", 2, 2)
        assert [r.agent_name for r in rankings[2:]] == [f"Agent {letter}" for letter in "CDEFGHIJ"]

    def test_custom_limit(self) -> None:
        rankings = rank_contributors(_records("A", "B", "C"), top_n=2)

        assert [r.agent_name for r in rankings] == ["A", "B"]

    def test_negative_limit_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            rank_contributors([], top_n=-1)


class TestGrouping:
    def test_blank_names_form_their_own_groups(self) -> None:
        rankings = rank_contributors(_records("A", "", "  ", "A"))

        assert len(rankings) == 3
        assert (rankings[0].agent_name, rankings[0].property_count, rankings[0].rank) == ("A", 2, 1)
        assert {r.agent_name for r in rankings[1:]} == {"", "  "}

    def test_missing_names_are_grouped_apart_from_empty_names(self) -> None:
        records = [
            ListingRecord(agent_id=5, agent_name=None),
            ListingRecord(agent_id=5, agent_name=""),
            ListingRecord(agent_id=5, agent_name=None),
        ]

        rankings = rank_contributors(records)

        assert [(r.agent_name, r.property_count) for r in rankings] == [(None, 2), ("", 1)]

    def test_same_name_different_ids_are_distinct(self) -> None:
        records = [
            ListingRecord(agent_id=1, agent_name="Makelaardij"),
            ListingRecord(agent_id=2, agent_name="Makelaardij"),
            ListingRecord(agent_id=1, agent_name="Makelaardij"),
        ]

        rankings = rank_contributors(records)

        assert [(r.agent_id, r.property_count) for r in rankings] == [(1, 2), (2, 1)]

    def test_ties_keep_first_seen_order(self) -> None:
        records = _records("Zeta", "Alpha", "Mid", "Alpha", "Zeta", "Mid", "Solo")

        rankings = rank_contributors(records)

        assert [r.agent_name for r in rankings] == ["Zeta", "Alpha", "Mid", "Solo"]
        assert [r.rank for r in rankings] == [1, 2, 3, 4]

    def test_truncation_cuts_ties_by_first_seen_order(self) -> None:
        names = [f"Agent {index:02d}" for index in range(12)]

        rankings = rank_contributors(_records(*names))

        assert [r.agent_name for r in rankings] == names[:10]
