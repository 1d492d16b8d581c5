"""Relationship records and typed views over archive entries.

Two layers:
- Aggregate: `RelationshipRecord` per account, held by a `RecordStore`
- Entry views: pydantic models validating the elements of each archive file
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# AGGREGATE
# =============================================================================

@dataclass
class RelationshipRecord:
    """What the archive says about one external account."""
    is_follower: bool = False
    is_following: bool = False
    engagement_refs: list[str] = field(default_factory=list)  # tweet ids, may repeat
    display_names: set[str] = field(default_factory=set)

    @property
    def is_mutual(self) -> bool:
        return self.is_follower and self.is_following

    @property
    def engagement_count(self) -> int:
        """Number of distinct engagements sent to this account."""
        return len(set(self.engagement_refs))


class RecordStore:
    """Account id -> RelationshipRecord, filled in place by the ingestion passes."""

    def __init__(self):
        self._records: dict[str, RelationshipRecord] = {}

    def get_or_create(self, account_id: str) -> RelationshipRecord:
        record = self._records.get(account_id)
        if record is None:
            record = RelationshipRecord()
            self._records[account_id] = record
        return record

    def get(self, account_id: str) -> Optional[RelationshipRecord]:
        return self._records.get(account_id)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[tuple[str, RelationshipRecord]]:
        return iter(self._records.items())


# =============================================================================
# ENTRY VIEWS
# =============================================================================

def _as_id(value: Union[str, int, None]) -> Optional[str]:
    """Account/tweet ids arrive as decimal strings; accept ints too."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("id must be a string or integer")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    raise ValueError("id must be a string or integer")


class ArchiveAccount(BaseModel):
    """`{"accountId": "...", "userLink": "..."}` inside follower/following entries."""
    model_config = ConfigDict(populate_by_name=True)

    account_id: str = Field(alias="accountId")
    user_link: Optional[str] = Field(default=None, alias="userLink")

    @field_validator("account_id", mode="before")
    @classmethod
    def _normalise_id(cls, v):
        return _as_id(v)


class FollowerEntry(BaseModel):
    """Element of follower.js."""
    follower: ArchiveAccount


class FollowingEntry(BaseModel):
    """Element of following.js."""
    following: ArchiveAccount


class Tweet(BaseModel):
    """The fields of an archived tweet that the reply pass needs."""
    id_str: Optional[str] = None
    in_reply_to_user_id_str: Optional[str] = None
    in_reply_to_screen_name: Optional[str] = None
    retweeted: Optional[bool] = False

    @field_validator("id_str", "in_reply_to_user_id_str", mode="before")
    @classmethod
    def _normalise_id(cls, v):
        return _as_id(v)

    @property
    def is_reply(self) -> bool:
        """Directed at another account and not a retweet."""
        return self.in_reply_to_user_id_str is not None and not self.retweeted


class TweetEntry(BaseModel):
    """Element of tweets.js / tweet-partN.js."""
    tweet: Tweet
