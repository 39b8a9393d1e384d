"""Filesystem KV store: one plain file per key."""

import os
import tempfile
from pathlib import Path, PurePosixPath

from .base import KVStore


class Files(KVStore):
    """KV store laid out as plain files under a root directory.

    A key maps to the file ``root / key``; ``"objects/ab12..."`` lands in
    the ``objects`` subdirectory. Values are written verbatim, with no
    header or extension. ``OSError`` from the filesystem is never caught
    here, except ``FileNotFoundError`` on reads, which means "absent".

    Every write goes to a temporary sibling file first and is then
    renamed over the target, so a key holds either its old value or the
    complete new one. There is no locking between processes.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        parts = PurePosixPath(key).parts
        if not parts or key.startswith("/") or ".." in parts:
            raise ValueError(f"Key escapes the store root: {key!r}")
        return self.root.joinpath(*parts)

    def _write_temp(self, path: Path, value: bytes) -> str:
        """Write ``value`` to a new file next to ``path`` and return its name."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
        except BaseException:
            os.unlink(tmp)
            raise
        return tmp

    def get(self, key: str) -> bytes | None:
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, bytes):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        path = self._path(key)
        tmp = self._write_temp(path, value)
        try:
            os.replace(tmp, path)
        except BaseException:
            os.unlink(tmp)
            raise

    def __contains__(self, key: str) -> bool:
        return self._path(key).is_file()

    def create(self, key: str, value: bytes) -> bool:
        if not isinstance(value, bytes):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        path = self._path(key)
        tmp = self._write_temp(path, value)
        try:
            os.link(tmp, path)
        except FileExistsError:
            return False
        finally:
            os.unlink(tmp)
        return True

    def prepare(self, prefix: str) -> None:
        self._path(prefix).mkdir(parents=True, exist_ok=True)
