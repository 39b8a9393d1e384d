"""Content-addressed object store."""

import hashlib
import logging
import string

from .errors import ObjectNotFound
from .kv.base import KVStore

logger = logging.getLogger(__name__)

OBJECTS_PREFIX = "objects"
OBJECT_KEY = OBJECTS_PREFIX + "/%s"


def hash_object(content: bytes) -> str:
    """SHA-1 hex digest of raw content."""
    return hashlib.sha1(content).hexdigest()


def _is_object_id(oid: str) -> bool:
    return bool(oid) and all(c in string.hexdigits for c in oid)


class ObjectStore:
    """Immutable objects keyed by the hash of their own bytes.

    File contents and serialized commits share this store; only the
    reader decides how to interpret the bytes.
    """

    def __init__(self, store: KVStore) -> None:
        self.store = store

    def init(self) -> None:
        """Create the ``objects`` area of the store."""
        self.store.prepare(OBJECTS_PREFIX)

    def store_object(self, content: bytes) -> str:
        """Write ``content`` under its digest and return the digest.

        Writing content that is already present is a no-op. An existing
        object whose bytes no longer match its digest is rewritten.
        """
        oid = hash_object(content)
        key = OBJECT_KEY % oid
        existing = self.store.get(key)
        if existing == content:
            logger.debug("Object %s already stored", oid)
            return oid
        if existing is not None:
            logger.warning("Rewriting corrupt object %s", oid)
        self.store.set(key, content)
        logger.debug("Stored object %s (%d bytes)", oid, len(content))
        return oid

    def read_object(self, oid: str) -> bytes:
        """Return the content stored under ``oid``.

        Raises:
            ObjectNotFound: If nothing is stored under ``oid``.
        """
        if not _is_object_id(oid):
            raise ObjectNotFound(oid)
        content = self.store.get(OBJECT_KEY % oid)
        if content is None:
            raise ObjectNotFound(oid)
        return content

    def __contains__(self, oid: str) -> bool:
        return _is_object_id(oid) and (OBJECT_KEY % oid) in self.store
