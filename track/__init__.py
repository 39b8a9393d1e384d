"""track: a minimal local version-control engine."""

from .commits import CommitChain
from .diffing import DiffFn, Segment, diff_lines
from .errors import (
    AlreadyInitialized,
    MalformedRecord,
    NotInitialized,
    ObjectNotFound,
    TrackError,
)
from .index import StagingIndex
from .kv.base import KVStore
from .objects import ObjectStore, hash_object
from .records import Commit, StagedEntry
from .repository import Repository, RepositoryState, repository
from .show import CommitChanges, FileChange, show_commit

__version__ = "0.1.0"

__all__ = [
    "AlreadyInitialized",
    "Commit",
    "CommitChain",
    "CommitChanges",
    "DiffFn",
    "FileChange",
    "KVStore",
    "MalformedRecord",
    "NotInitialized",
    "ObjectNotFound",
    "ObjectStore",
    "Repository",
    "RepositoryState",
    "Segment",
    "StagedEntry",
    "StagingIndex",
    "TrackError",
    "diff_lines",
    "hash_object",
    "repository",
    "show_commit",
]
