"""Tests for the content-addressed ObjectStore."""

import hashlib

import pytest

from track import ObjectNotFound, ObjectStore, hash_object
from track.kv.memory import Memory


class TestObjectStore:
    def test_store_and_read(self):
        objects = ObjectStore(Memory())
        oid = objects.store_object(b"hello")
        assert objects.read_object(oid) == b"hello"

    def test_id_is_content_digest(self):
        objects = ObjectStore(Memory())
        oid = objects.store_object(b"hello")
        assert oid == hashlib.sha1(b"hello").hexdigest()
        assert oid == hash_object(b"hello")
        assert len(oid) == 40

    def test_empty_content(self):
        objects = ObjectStore(Memory())
        oid = objects.store_object(b"")
        assert objects.read_object(oid) == b""

    def test_binary_content_roundtrips_verbatim(self):
        objects = ObjectStore(Memory())
        content = bytes(range(256))
        assert objects.read_object(objects.store_object(content)) == content

    def test_different_content_different_ids(self):
        objects = ObjectStore(Memory())
        assert objects.store_object(b"a") != objects.store_object(b"b")

    def test_contains(self):
        objects = ObjectStore(Memory())
        oid = objects.store_object(b"x")
        assert oid in objects
        assert hash_object(b"y") not in objects
        assert "../HEAD" not in objects


class TestObjectStoreIdempotent:
    def test_same_id_twice(self):
        objects = ObjectStore(Memory())
        assert objects.store_object(b"same") == objects.store_object(b"same")

    def test_no_duplicate_storage(self):
        store = Memory()
        objects = ObjectStore(store)
        objects.store_object(b"same")
        objects.store_object(b"same")
        assert list(store.memory) == [f"objects/{hash_object(b'same')}"]

    def test_existing_object_is_not_rewritten(self):
        store = Memory()
        objects = ObjectStore(store)
        oid = objects.store_object(b"same")
        writes = []
        original_set = store.set
        store.set = lambda k, v: (writes.append(k), original_set(k, v))  # type: ignore
        assert objects.store_object(b"same") == oid
        assert writes == []


class TestObjectNotFound:
    def test_missing_object(self):
        objects = ObjectStore(Memory())
        with pytest.raises(ObjectNotFound) as exc:
            objects.read_object(hash_object(b"never stored"))
        assert exc.value.oid == hash_object(b"never stored")

    @pytest.mark.parametrize("oid", ["", "../HEAD", "index", "zz"])
    def test_invalid_ids(self, oid):
        objects = ObjectStore(Memory())
        with pytest.raises(ObjectNotFound):
            objects.read_object(oid)


class TestObjectStoreRepair:
    def test_truncated_object_is_rewritten(self):
        store = Memory()
        objects = ObjectStore(store)
        oid = hash_object(b"hello world")
        store.set(f"objects/{oid}", b"hel")
        assert objects.store_object(b"hello world") == oid
        assert objects.read_object(oid) == b"hello world"

    def test_truncated_object_on_disk_is_rewritten(self, tmp_path):
        from track.kv.files import Files

        root = tmp_path / ".track"
        oid = hash_object(b"hello world")
        (root / "objects").mkdir(parents=True)
        (root / "objects" / oid).write_bytes(b"hel")
        objects = ObjectStore(Files(root))
        assert objects.store_object(b"hello world") == oid
        assert (root / "objects" / oid).read_bytes() == b"hello world"

    def test_init_prepares_objects_area(self, tmp_path):
        from track.kv.files import Files

        objects = ObjectStore(Files(tmp_path / ".track"))
        objects.init()
        assert (tmp_path / ".track" / "objects").is_dir()
