"""Staging index: file snapshots queued for the next commit."""

import logging

from .errors import NotInitialized
from .kv.base import KVStore
from .objects import ObjectStore
from .records import StagedEntry, decode_entries, encode_entries

logger = logging.getLogger(__name__)

INDEX_KEY = "index"
EMPTY_INDEX = encode_entries([])


class StagingIndex:
    """Ordered list of ``StagedEntry`` persisted under ``index``.

    Staging a path that is already staged replaces its entry in place,
    so a path appears at most once. New paths are appended.
    """

    def __init__(self, store: KVStore, objects: ObjectStore) -> None:
        self.store = store
        self.objects = objects

    @property
    def is_initialized(self) -> bool:
        return INDEX_KEY in self.store

    def init(self) -> bool:
        """Create an empty index. Returns False if one already exists."""
        created = self.store.create(INDEX_KEY, EMPTY_INDEX)
        if created:
            logger.debug("Created empty index")
        return created

    def entries(self) -> list[StagedEntry]:
        """The staged entries, in staging order.

        Raises:
            NotInitialized: If the index was never created.
            MalformedRecord: If the persisted index cannot be parsed.
        """
        raw = self.store.get(INDEX_KEY)
        if raw is None:
            raise NotInitialized(INDEX_KEY)
        return decode_entries(raw)

    def stage(self, path: str, content: bytes) -> str:
        """Store ``content`` and record it for ``path``. Returns the object id."""
        entries = self.entries()
        oid = self.objects.store_object(content)
        entry = StagedEntry(path=path, hash=oid)
        for i, existing in enumerate(entries):
            if existing.path == path:
                entries[i] = entry
                logger.debug("Restaged %s as %s", path, oid)
                break
        else:
            entries.append(entry)
            logger.debug("Staged %s as %s", path, oid)
        self.store.set(INDEX_KEY, encode_entries(entries))
        return oid

    def clear(self) -> None:
        """Empty the index. Only a successful commit calls this."""
        self.store.set(INDEX_KEY, EMPTY_INDEX)
