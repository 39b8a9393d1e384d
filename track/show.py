"""Per-file changes a commit introduced relative to its parent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from .commits import CommitChain
from .diffing import DiffFn, Segment, diff_lines
from .objects import ObjectStore
from .records import Commit

logger = logging.getLogger(__name__)

ChangeStatus = Literal["first_commit", "new", "modified"]


@dataclass(frozen=True)
class FileChange:
    """One tracked file in a commit.

    ``segments`` is only populated for ``modified`` files, i.e. files
    that also appear in the parent commit.
    """

    path: str
    status: ChangeStatus
    content: str
    segments: tuple[Segment, ...] = ()


@dataclass(frozen=True)
class CommitChanges:
    """All file changes of a single commit."""

    oid: str
    commit: Commit
    files: tuple[FileChange, ...]


def _text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def show_commit(
    chain: CommitChain,
    objects: ObjectStore,
    oid: str,
    diff: DiffFn = diff_lines,
) -> CommitChanges:
    """Resolve every file of commit ``oid`` and diff it against the parent.

    Files of a root commit are reported as ``first_commit``; files whose
    path is absent from the parent are ``new``. Neither invokes ``diff``.

    Raises:
        ObjectNotFound: If the commit, its parent or a file object is missing.
    """
    commit = chain.read(oid)
    parent = chain.read(commit.parent) if commit.parent else None

    changes: list[FileChange] = []
    for entry in commit.files:
        content = _text(objects.read_object(entry.hash))
        if parent is None:
            changes.append(FileChange(entry.path, "first_commit", content))
            continue
        previous = parent.find(entry.path)
        if previous is None:
            changes.append(FileChange(entry.path, "new", content))
            continue
        old = _text(objects.read_object(previous.hash))
        segments = tuple(diff(old, content))
        logger.debug("Diffed %s: %d segment(s)", entry.path, len(segments))
        changes.append(FileChange(entry.path, "modified", content, segments))

    return CommitChanges(oid=oid, commit=commit, files=tuple(changes))
