"""Tests for StagedEntry and Commit records."""

import json

import pytest

from track import Commit, MalformedRecord, StagedEntry
from track.records import decode_entries, encode_entries


def make_commit(**overrides):
    fields = {
        "timestamp": "2024-01-01T00:00:00.000001+00:00",
        "message": "first",
        "files": (StagedEntry("a.txt", "aa"), StagedEntry("b.txt", "bb")),
        "parent": None,
    }
    fields.update(overrides)
    return Commit(**fields)


class TestCommitEncoding:
    def test_decode_inverts_encode(self):
        commit = make_commit(parent="abc123")
        assert Commit.decode(commit.encode()) == commit

    def test_encoding_is_deterministic(self):
        assert make_commit().encode() == make_commit().encode()

    def test_field_layout(self):
        record = json.loads(make_commit().encode())
        assert list(record) == ["timestamp", "message", "files", "parent"]
        assert record["files"] == [
            {"path": "a.txt", "hash": "aa"},
            {"path": "b.txt", "hash": "bb"},
        ]
        assert record["parent"] is None

    def test_any_field_changes_bytes(self):
        base = make_commit().encode()
        assert make_commit(message="other").encode() != base
        assert make_commit(parent="p").encode() != base
        assert make_commit(files=()).encode() != base
        assert make_commit(timestamp="2024-01-01T00:00:01+00:00").encode() != base

    def test_empty_parent_string_reads_as_none(self):
        raw = json.dumps(
            {"timestamp": "t", "message": "m", "files": [], "parent": ""}
        ).encode()
        assert Commit.decode(raw).parent is None


class TestCommitFind:
    def test_first_match_by_path(self):
        commit = make_commit(
            files=(StagedEntry("a.txt", "1"), StagedEntry("a.txt", "2"))
        )
        assert commit.find("a.txt") == StagedEntry("a.txt", "1")

    def test_no_match(self):
        assert make_commit().find("missing.txt") is None

    def test_no_content_hash_fallback(self):
        commit = make_commit(files=(StagedEntry("old.txt", "same"),))
        assert commit.find("new.txt") is None


class TestMalformedRecords:
    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b"\xff\xfe",
            b"[]",
            b'{"message": "m", "files": [], "parent": null}',
            b'{"timestamp": "t", "message": 3, "files": [], "parent": null}',
            b'{"timestamp": "t", "message": "m", "files": {}, "parent": null}',
            b'{"timestamp": "t", "message": "m", "files": [], "parent": 7}',
            b'{"timestamp": "t", "message": "m", "files": [{"path": "a"}], "parent": null}',
            b'{"timestamp": "t", "message": "m", "files": ["a"], "parent": null}',
        ],
    )
    def test_commit_rejected(self, raw):
        with pytest.raises(MalformedRecord):
            Commit.decode(raw)

    def test_index_must_be_list(self):
        with pytest.raises(MalformedRecord, match="not a list"):
            decode_entries(b'{"path": "a", "hash": "b"}')

    def test_index_roundtrip(self):
        entries = [StagedEntry("a.txt", "aa"), StagedEntry("b.txt", "bb")]
        assert decode_entries(encode_entries(entries)) == entries

    def test_empty_index(self):
        assert decode_entries(b"[]") == []
