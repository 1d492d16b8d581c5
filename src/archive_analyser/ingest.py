"""Ingestion passes - fold archive documents into a RecordStore.

Each pass consumes one unwrapped document and mutates the store in place.
Passes only ever set flags, append refs and add names, so the final store
does not depend on the order documents are ingested in.

Archives are big and the tweet history may be split into several parts
(tweets.js, tweets-part1.js, ...). `build_store` holds at most one decoded
document at a time: load, ingest, release, then load the next.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable, Iterator, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .config import settings
from .errors import FileAccessError, ParseError
from .models import FollowerEntry, FollowingEntry, RecordStore, TweetEntry
from .unwrap import load_document


logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)


def _entries(doc: Any, model: Type[EntryT], name: str) -> Iterator[EntryT]:
    """Validate each element of a document against `model`."""
    if not isinstance(doc, list):
        raise ParseError(f"{name}: expected a JSON array, got {type(doc).__name__}")

    for index, element in enumerate(doc):
        try:
            yield model.model_validate(element)
        except ValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(p) for p in first.get("loc", ()))
            raise ParseError(
                f"{name}: entry {index} is malformed ({where}: {first.get('msg')})"
            ) from e


def ingest_followers(doc: Any, store: RecordStore, name: str = "follower") -> int:
    """Mark every account in a follower document as a follower."""
    count = 0
    for entry in _entries(doc, FollowerEntry, name):
        store.get_or_create(entry.follower.account_id).is_follower = True
        count += 1
    logger.debug(f"{name}: {count} followers")
    return count


def ingest_following(doc: Any, store: RecordStore, name: str = "following") -> int:
    """Mark every account in a following document as followed."""
    count = 0
    for entry in _entries(doc, FollowingEntry, name):
        store.get_or_create(entry.following.account_id).is_following = True
        count += 1
    logger.debug(f"{name}: {count} following")
    return count


def ingest_engagements(doc: Any, store: RecordStore, name: str = "tweets") -> int:
    """Record replies (non-retweets with a reply target) against their target.

    Returns the number of replies recorded.
    """
    count = 0
    for index, entry in enumerate(_entries(doc, TweetEntry, name)):
        tweet = entry.tweet
        if not tweet.is_reply:
            continue
        if tweet.id_str is None:
            raise ParseError(f"{name}: entry {index} is a reply without an id_str")

        record = store.get_or_create(tweet.in_reply_to_user_id_str)
        record.engagement_refs.append(tweet.id_str)
        if tweet.in_reply_to_screen_name:
            record.display_names.add(tweet.in_reply_to_screen_name)
        count += 1
    logger.debug(f"{name}: {count} replies")
    return count


def find_engagement_files(data_dir: Path, pattern: str = None) -> list[Path]:
    """All tweet archive parts in `data_dir`, sorted by file name."""
    regex = re.compile(pattern or settings.engagement_file_pattern)
    data_dir = Path(data_dir)
    try:
        names = sorted(p.name for p in data_dir.iterdir() if p.is_file())
    except OSError as e:
        raise FileAccessError(f"Could not list directory '{data_dir}'") from e

    paths = [data_dir / n for n in names if regex.match(n)]
    if not paths:
        raise FileAccessError(
            f"No tweet files matching '{regex.pattern}' in '{data_dir}', is this an archive data directory?"
        )
    logger.debug(f"Tweet files: {', '.join(p.name for p in paths)}")
    return paths


def build_store(
    data_dir: Path,
    loader: Callable[[Path], Any] = load_document,
    follower_file: str = None,
    following_file: str = None,
    engagement_pattern: str = None,
) -> RecordStore:
    """Run every ingestion pass over an archive data directory."""
    data_dir = Path(data_dir)
    store = RecordStore()

    passes: list[tuple[Path, Callable[..., int]]] = [
        (data_dir / (follower_file or settings.follower_file), ingest_followers),
        (data_dir / (following_file or settings.following_file), ingest_following),
    ]
    passes.extend(
        (path, ingest_engagements)
        for path in find_engagement_files(data_dir, engagement_pattern)
    )

    for path, ingest in passes:
        doc = loader(path)
        ingest(doc, store, name=path.name)
        # Release before the next load; only one document may be resident.
        del doc

    logger.debug(f"Record store holds {len(store)} accounts")
    return store
