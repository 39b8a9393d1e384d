"""Commit chain: a linear, parent-linked log of snapshots over an object store."""

import logging
from datetime import UTC, datetime
from typing import Iterator

from .errors import ObjectNotFound
from .index import StagingIndex
from .kv.base import KVStore
from .objects import ObjectStore
from .records import Commit

logger = logging.getLogger(__name__)

HEAD_KEY = "HEAD"


class CommitChain:
    """Builds commits from the staging index and tracks HEAD.

    Commits are stored as ordinary objects; their id is the hash of
    ``Commit.encode()``. HEAD is the only mutable pointer and holds the
    newest commit id, or is empty before the first commit.
    """

    def __init__(
        self, store: KVStore, objects: ObjectStore, index: StagingIndex
    ) -> None:
        self.store = store
        self.objects = objects
        self.index = index

    def init(self) -> bool:
        """Create an empty HEAD. Returns False if one already exists."""
        created = self.store.create(HEAD_KEY, b"")
        if created:
            logger.debug("Created empty HEAD")
        return created

    @property
    def head(self) -> str | None:
        """Id of the newest commit; None when there are no commits."""
        raw = self.store.get(HEAD_KEY)
        if raw is None:
            return None
        try:
            oid = raw.decode("ascii").strip()
        except UnicodeDecodeError:
            logger.warning("Ignoring unreadable HEAD")
            return None
        return oid or None

    def commit(self, message: str, *, now: datetime | None = None) -> str:
        """Snapshot the staging index as a new commit on top of HEAD.

        An empty index still produces a commit (with no files). The
        commit object is stored before HEAD moves, and the index is
        cleared last.

        Returns:
            The new commit id.
        """
        files = tuple(self.index.entries())
        record = Commit(
            timestamp=(now or datetime.now(UTC)).isoformat(),
            message=message,
            files=files,
            parent=self.head,
        )
        oid = self.objects.store_object(record.encode())
        self.store.set(HEAD_KEY, oid.encode("ascii"))
        logger.debug("HEAD moved to %s (parent %s)", oid, record.parent)
        self.index.clear()
        logger.info("Created commit %s with %d file(s)", oid, len(files))
        return oid

    def read(self, oid: str) -> Commit:
        """Load and validate the commit stored under ``oid``.

        Raises:
            ObjectNotFound: If no such commit exists.
            MalformedRecord: If the object is not a commit record.
        """
        try:
            raw = self.objects.read_object(oid)
        except ObjectNotFound as e:
            raise ObjectNotFound(oid, f"Commit not found: {oid}") from e
        return Commit.decode(raw)

    def history(self, start: str | None = None) -> Iterator[tuple[str, Commit]]:
        """Yield ``(id, commit)`` pairs from ``start`` (default HEAD) back to the root.

        A missing commit along the way raises ``ObjectNotFound`` rather
        than ending the walk early.
        """
        current = start or self.head
        while current is not None:
            commit = self.read(current)
            logger.debug("Walked to %s", current)
            yield current, commit
            current = commit.parent
