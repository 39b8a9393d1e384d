"""Typed records stored by the repository: staged entries and commits."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import MalformedRecord


@dataclass(frozen=True)
class StagedEntry:
    """A file path paired with the object id of its content."""

    path: str
    hash: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "hash": self.hash}

    @classmethod
    def from_dict(cls, raw: Any) -> StagedEntry:
        if not isinstance(raw, dict):
            raise MalformedRecord(f"Expected an entry object, got {type(raw).__name__}")
        path = raw.get("path")
        oid = raw.get("hash")
        if not isinstance(path, str) or not isinstance(oid, str):
            raise MalformedRecord(f"Entry needs string 'path' and 'hash': {raw!r}")
        return cls(path=path, hash=oid)


@dataclass(frozen=True)
class Commit:
    """An immutable snapshot of the staging index.

    ``parent`` is None only for the first commit in the chain.
    """

    timestamp: str
    message: str
    files: tuple[StagedEntry, ...]
    parent: str | None

    def find(self, path: str) -> StagedEntry | None:
        """Return the first entry recorded for ``path``, if any."""
        for entry in self.files:
            if entry.path == path:
                return entry
        return None

    def encode(self) -> bytes:
        """Serialize deterministically; these bytes are what gets hashed."""
        record = {
            "timestamp": self.timestamp,
            "message": self.message,
            "files": [entry.to_dict() for entry in self.files],
            "parent": self.parent,
        }
        return json.dumps(record, separators=(",", ":")).encode("utf-8")

    @classmethod
    def decode(cls, raw: bytes) -> Commit:
        record = _load_json(raw)
        if not isinstance(record, dict):
            raise MalformedRecord("Commit record is not an object")
        timestamp = record.get("timestamp")
        message = record.get("message")
        files = record.get("files")
        parent = record.get("parent")
        if not isinstance(timestamp, str) or not isinstance(message, str):
            raise MalformedRecord("Commit needs string 'timestamp' and 'message'")
        if not isinstance(files, list):
            raise MalformedRecord("Commit 'files' must be a list")
        if parent is not None and not isinstance(parent, str):
            raise MalformedRecord("Commit 'parent' must be a string or null")
        return cls(
            timestamp=timestamp,
            message=message,
            files=tuple(StagedEntry.from_dict(f) for f in files),
            parent=parent or None,
        )


def encode_entries(entries: list[StagedEntry] | tuple[StagedEntry, ...]) -> bytes:
    """Serialize a staging index."""
    return json.dumps([e.to_dict() for e in entries]).encode("utf-8")


def decode_entries(raw: bytes) -> list[StagedEntry]:
    """Parse a staging index, validating every entry."""
    records = _load_json(raw)
    if not isinstance(records, list):
        raise MalformedRecord("Index is not a list")
    return [StagedEntry.from_dict(r) for r in records]


def _load_json(raw: bytes) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedRecord(f"Cannot parse record: {e}") from e
