"""Abstract KV store interface."""

from abc import ABC, abstractmethod


class KVStore(ABC):
    """Key-value store operating on bytes only.

    Keys are repository-relative names such as ``"HEAD"``, ``"index"``
    or ``"objects/<hex>"``. Serialization is handled at higher layers
    (e.g., ``StagingIndex``, ``CommitChain``).
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Get bytes value for key, or None if not found."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Set bytes value for key."""

    @abstractmethod
    def __contains__(self, key: str) -> bool:
        """Check if key exists in store."""

    @abstractmethod
    def create(self, key: str, value: bytes) -> bool:
        """Set value only if key does not exist yet.

        Returns True if the key was created, False if it already existed.
        """

    def prepare(self, prefix: str) -> None:
        """Make room for keys under ``prefix`` (e.g. ``"objects"``).

        Backends without a notion of directories do nothing.
        """
