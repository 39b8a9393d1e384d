"""Shared fixtures."""

import pytest

from track import Repository
from track.kv.memory import Memory


@pytest.fixture
def repo(tmp_path):
    """An initialized in-memory repository whose work tree is ``tmp_path``."""
    r = Repository(Memory(), workdir=tmp_path)
    r.init()
    return r
