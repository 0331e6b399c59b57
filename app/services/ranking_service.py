"""
app/services/ranking_service.py

Agent leaderboard aggregation.

Grouping
--------
Listings are grouped by the ``(agent_id, agent_name)`` pair. Nothing is
filtered: an empty or whitespace-only name is a group of its own, a missing
(None) name is another, and the same name under two ids yields two groups.

Ordering
--------
Groups are ordered by listing count, highest first. Groups with equal counts
keep the order in which they were first seen in the input. Ranks are
assigned by position after truncation, starting at 1.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from typing import Final

from app.domain.listing_report import ContributorRanking
from app.schemas.listing_feed import ListingRecord

logger = logging.getLogger(__name__)

TOP_AGENT_LIMIT: Final[int] = 10


def rank_contributors(
    records: Iterable[ListingRecord],
    top_n: int = TOP_AGENT_LIMIT,
) -> list[ContributorRanking]:
    """
    Return the ``top_n`` agents with the most listings in ``records``.

    Returns an empty list when ``records`` is empty.
    """

    if top_n < 0:
        raise ValueError("top_n must be non-negative.")

    # Counter keeps first-seen key order and most_common() sorts stably.
    counts = Counter((record.agent_id, record.agent_name) for record in records)
    leaders = counts.most_common(top_n)

    rankings = [
        ContributorRanking(
            agent_name=agent_name,
            agent_id=agent_id,
            property_count=count,
            rank=position,
        )
        for position, ((agent_id, agent_name), count) in enumerate(leaders, start=1)
    ]
    logger.debug("Ranked agents groups=%s returned=%s", len(counts), len(rankings))
    return rankings
