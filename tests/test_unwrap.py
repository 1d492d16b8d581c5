"""Test wrapped-literal unwrapping and document loading."""
import json
import logging

import pytest

from archive_analyser.errors import FileAccessError, FormatError, ParseError
from archive_analyser.unwrap import load_document, memory_in_use, unwrap


class TestUnwrap:
    """Test stripping the assignment prefix."""

    def test_archive_style_prefix(self):
        """The usual `window.YTD.x.part0 = [...]` form."""
        text = 'window.YTD.follower.part0 = [ {"follower": {"accountId": "1"}} ]'
        assert unwrap(text) == [{"follower": {"accountId": "1"}}]

    @pytest.mark.parametrize("prefix", ["x", "window.YTD.tweets.part12", "  \n\tvar data"])
    def test_prefix_content_is_irrelevant(self, prefix):
        """Whatever precedes the marker is discarded."""
        payload = [{"a": [1, 2, {"b": None}]}, "s", 3.5]
        assert unwrap(prefix + " = " + json.dumps(payload)) == payload

    def test_marker_at_bound_is_accepted(self):
        """Marker starting exactly at the offset bound still counts."""
        text = "p" * 100 + " = [1]"
        assert unwrap(text, max_offset=100) == [1]

    def test_marker_past_bound_is_rejected(self):
        """Marker found too late is a format error."""
        text = "p" * 101 + " = [1]"
        with pytest.raises(FormatError):
            unwrap(text, max_offset=100)

    def test_marker_only_inside_data_is_rejected(self):
        """A ' = ' deep inside a plain JSON file is not a wrapper."""
        text = json.dumps([{"text": "x" * 200 + " = y"}])
        with pytest.raises(FormatError):
            unwrap(text, name="tweets.js")

    def test_missing_marker(self):
        """Plain JSON without an assignment is rejected."""
        with pytest.raises(FormatError, match="follower.js"):
            unwrap("[1, 2, 3]", name="follower.js")

    def test_malformed_json(self):
        """Broken JSON after the marker is a parse error."""
        with pytest.raises(ParseError):
            unwrap("window.YTD.tweets.part0 = [ {")

    def test_null_payload(self):
        """JSON null decodes to nothing and is rejected."""
        with pytest.raises(ParseError):
            unwrap("window.YTD.tweets.part0 = null")

    def test_empty_array_is_valid(self):
        """An account with no followers exports an empty array."""
        assert unwrap("window.YTD.follower.part0 = [ ]") == []

    def test_deeply_nested_payload(self):
        """Nesting past the recursion limit is a parse error, not a crash."""
        text = "window.YTD.tweets.part0 = " + "[" * 200000 + "]" * 200000
        with pytest.raises(ParseError, match="tweets.js"):
            unwrap(text, name="tweets.js")

    def test_custom_marker(self):
        """Marker can be configured."""
        assert unwrap("data := {\"k\": 1}", marker=" := ") == {"k": 1}


class TestLoadDocument:
    """Test reading archive files from disk."""

    def test_loads_file(self, tmp_path):
        """File contents are unwrapped."""
        path = tmp_path / "following.js"
        path.write_text('window.YTD.following.part0 = [{"following": {"accountId": "9"}}]', encoding="utf-8")
        assert load_document(path) == [{"following": {"accountId": "9"}}]

    def test_tolerates_bom(self, tmp_path):
        """A UTF-8 BOM before the prefix is ignored."""
        path = tmp_path / "tweets.js"
        path.write_bytes("\ufeffwindow.YTD.tweets.part0 = [1]".encode("utf-8"))
        assert load_document(path) == [1]

    def test_missing_file(self, tmp_path):
        """Missing files raise FileAccessError naming the path."""
        with pytest.raises(FileAccessError, match="does it exist"):
            load_document(tmp_path / "follower.js")

    def test_invalid_utf8_replaced(self, tmp_path):
        """Undecodable bytes become U+FFFD rather than failing the file."""
        path = tmp_path / "tweets.js"
        path.write_bytes(b'window.YTD.tweets.part0 = ["caf\xe9"]')
        assert load_document(path) == ["caf\ufffd"]

    def test_logs_memory_checkpoint(self, tmp_path, caplog):
        """Bytes in use are reported after each load."""
        path = tmp_path / "follower.js"
        path.write_text("window.YTD.follower.part0 = []", encoding="utf-8")

        with caplog.at_level(logging.INFO, logger="archive_analyser"):
            load_document(path)

        assert "Memory used after loading 'follower.js'" in caplog.text
        assert "bytes" in caplog.text

    def test_memory_in_use_is_resident_size(self):
        """Process RSS is always available and positive."""
        used = memory_in_use()
        assert isinstance(used, int)
        assert used > 0
