"""Classifier - partition the record store into ranked result sets."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

from .models import RecordStore


logger = logging.getLogger(__name__)


class RankedAccount(NamedTuple):
    """One row of a result set."""
    account_id: str
    score: int  # distinct engagement count


@dataclass(frozen=True)
class Classification:
    """The three result sets, each sorted by score descending."""
    mutuals: tuple[RankedAccount, ...]
    engaged: tuple[RankedAccount, ...]    # non-mutual followers replied to
    unengaged: tuple[RankedAccount, ...]  # non-mutual followers never replied to


def rank(entries: list[RankedAccount]) -> tuple[RankedAccount, ...]:
    """Sort by score descending, ties by account id ascending.

    Shorter ids first, so decimal ids tie-break in numeric order.
    """
    return tuple(sorted(entries, key=lambda e: (-e.score, len(e.account_id), e.account_id)))


def classify(store: RecordStore) -> Classification:
    """Split followers into mutuals and engaged/unengaged non-mutual followers.

    Accounts we only follow, or only ever replied to, are in no set.
    """
    mutuals: list[RankedAccount] = []
    engaged: list[RankedAccount] = []
    unengaged: list[RankedAccount] = []

    for account_id, record in store:
        if not record.is_follower:
            continue
        entry = RankedAccount(account_id, record.engagement_count)
        if record.is_following:
            mutuals.append(entry)
        elif entry.score:
            engaged.append(entry)
        else:
            unengaged.append(entry)

    result = Classification(
        mutuals=rank(mutuals),
        engaged=rank(engaged),
        unengaged=rank(unengaged),
    )
    logger.debug(
        f"Classified {len(store)} accounts: {len(result.mutuals)} mutual, "
        f"{len(result.engaged)} engaged, {len(result.unengaged)} unengaged"
    )
    return result
