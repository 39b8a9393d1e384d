"""Repository facade and factory function."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Literal

from .commits import HEAD_KEY, CommitChain
from .diffing import DiffFn, diff_lines
from .errors import AlreadyInitialized, NotInitialized
from .index import StagingIndex
from .kv.base import KVStore
from .kv.memory import Memory
from .objects import ObjectStore
from .records import Commit, StagedEntry
from .show import CommitChanges, show_commit

logger = logging.getLogger(__name__)

REPO_DIRNAME = ".track"


@dataclass(frozen=True)
class RepositoryState:
    """Snapshot of the repository's mutable pointers."""

    head: str | None
    stage_dirty: bool


class Repository:
    """A tracked working directory.

    Wires an ``ObjectStore``, a ``StagingIndex`` and a ``CommitChain``
    over one ``KVStore``. Assumes a single process touches the store at
    a time; nothing here locks the index or HEAD.
    """

    def __init__(
        self,
        store: KVStore | None = None,
        *,
        workdir: str | Path = ".",
        diff: DiffFn = diff_lines,
    ) -> None:
        if store is None:
            store = Memory()
        self.store = store
        self.workdir = Path(workdir)
        self.objects = ObjectStore(store)
        self.index = StagingIndex(store, self.objects)
        self.chain = CommitChain(store, self.objects, self.index)
        self._diff = diff

    # -- Setup --

    def init(self) -> None:
        """Create the objects area, HEAD and the index where missing.

        Raises:
            AlreadyInitialized: If both already existed; nothing changed.
        """
        self.objects.init()
        created_head = self.chain.init()
        created_index = self.index.init()
        if not (created_head or created_index):
            raise AlreadyInitialized("Already initialized the .track folder")
        logger.info("Initialized repository")

    @property
    def is_initialized(self) -> bool:
        return HEAD_KEY in self.store and self.index.is_initialized

    # -- State --

    @property
    def head(self) -> str | None:
        return self.chain.head

    @property
    def state(self) -> RepositoryState:
        return RepositoryState(
            head=self.chain.head, stage_dirty=bool(self.index.entries())
        )

    def staged(self) -> list[StagedEntry]:
        return self.index.entries()

    # -- Write operations --

    def stage(self, path: str, content: bytes) -> str:
        """Stage ``content`` under ``path``. Returns the object id."""
        return self.index.stage(path, content)

    def add(self, path: str) -> str:
        """Read a working-tree file and stage it under ``path``.

        ``path`` is resolved against ``workdir``. ``OSError`` from the
        read propagates.
        """
        if not self.index.is_initialized:
            raise NotInitialized("index")
        content = (self.workdir / path).read_bytes()
        return self.stage(Path(path).as_posix(), content)

    def commit(self, message: str, *, now: datetime | None = None) -> str:
        """Commit the staged files. Returns the new commit id."""
        if HEAD_KEY not in self.store:
            raise NotInitialized(HEAD_KEY)
        return self.chain.commit(message, now=now)

    # -- Read operations --

    def read_commit(self, oid: str) -> Commit:
        return self.chain.read(oid)

    def log(self) -> Iterator[tuple[str, Commit]]:
        """Commits from HEAD back to the first one, newest first."""
        return self.chain.history()

    def show(self, oid: str) -> CommitChanges:
        """File changes introduced by commit ``oid``."""
        return show_commit(self.chain, self.objects, oid, diff=self._diff)


def repository(
    storage: Literal["disk", "memory"] = "disk",
    *,
    path: str | Path | None = None,
    workdir: str | Path | None = None,
    diff: DiffFn = diff_lines,
) -> Repository:
    """Create a Repository with sensible defaults.

    Args:
        storage: ``"disk"`` (default) stores plain files under ``path``;
            ``"memory"`` keeps everything in process.
        path: Repository root for the disk backend. Defaults to
            ``<workdir>/.track``.
        workdir: Directory that ``add`` reads files from (default ``"."``).
        diff: Diff primitive used by ``show``.

    Returns:
        A ``Repository``. Call ``init()`` before first use.
    """
    workdir = Path(workdir) if workdir is not None else Path(".")
    if storage == "memory":
        if path is not None:
            raise ValueError("path is only valid for storage='disk'")
        backend: KVStore = Memory()
    elif storage == "disk":
        from .kv.files import Files

        backend = Files(path if path is not None else workdir / REPO_DIRNAME)
    else:
        raise ValueError(f"Unknown storage: {storage!r}")

    return Repository(backend, workdir=workdir, diff=diff)
