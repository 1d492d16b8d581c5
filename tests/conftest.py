"""Shared fixtures: synthetic archive data directories."""
import json

import pytest


def wrap(kind: str, entries, part: int = 0) -> str:
    """Render entries the way the archive does: `window.YTD.<kind>.part0 = [...]`."""
    return f"window.YTD.{kind}.part{part} = " + json.dumps(entries, indent=2)


def follower(account_id):
    return {"follower": {"accountId": account_id, "userLink": f"https://twitter.com/intent/user?user_id={account_id}"}}


def following(account_id):
    return {"following": {"accountId": account_id, "userLink": f"https://twitter.com/intent/user?user_id={account_id}"}}


def reply(tweet_id, to_id, to_name, retweeted=False):
    return {
        "tweet": {
            "id_str": tweet_id,
            "in_reply_to_user_id_str": to_id,
            "in_reply_to_screen_name": to_name,
            "retweeted": retweeted,
            "full_text": f"@{to_name} hello",
        }
    }


def plain_tweet(tweet_id):
    return {"tweet": {"id_str": tweet_id, "retweeted": False, "full_text": "just posting"}}


@pytest.fixture
def make_archive(tmp_path):
    """Factory writing follower.js, following.js and tweet parts into a data dir."""

    def _make(followers=(), followings=(), tweet_parts=((),)):
        data_dir = tmp_path / "data"
        data_dir.mkdir(exist_ok=True)
        (data_dir / "follower.js").write_text(
            wrap("follower", [follower(a) for a in followers]), encoding="utf-8"
        )
        (data_dir / "following.js").write_text(
            wrap("following", [following(a) for a in followings]), encoding="utf-8"
        )
        for i, tweets in enumerate(tweet_parts):
            name = "tweets.js" if i == 0 else f"tweets-part{i}.js"
            (data_dir / name).write_text(wrap("tweets", list(tweets), part=i), encoding="utf-8")
        return data_dir

    return _make


@pytest.fixture
def sample_archive(make_archive):
    """followers {A, B}, following {A}, three distinct replies to B plus one duplicate."""
    return make_archive(
        followers=["100", "200"],
        followings=["100"],
        tweet_parts=[
            [
                reply("1", "200", "bee"),
                reply("2", "200", "bee"),
                plain_tweet("5"),
            ],
            [
                reply("3", "200", "bee_renamed"),
                reply("2", "200", "bee"),
                reply("4", "200", "bee", retweeted=True),
            ],
        ],
    )
