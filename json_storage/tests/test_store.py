"""
Store Tests - load/persist, base64 encoding and per-item operations.
"""

import base64
import json
import os

import pytest


def _write(path, content):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


class TestEncoding:
    """Test base64 value helpers."""

    @pytest.mark.parametrize("text", ["", "1", "hello world", "caffè ☕ 日本語", "line\nbreak"])
    def test_round_trip(self, text):
        """Encoding then decoding returns the original text."""
        from json_storage.core import encode_value, decode_value

        assert decode_value(encode_value(text)) == text

    def test_encoding_matches_standard_base64(self):
        """Stored form is plain base64 of the UTF-8 bytes."""
        from json_storage.core import encode_value

        assert encode_value("hello") == "aGVsbG8="
        assert encode_value("") == ""

    def test_decode_rejects_bad_padding(self):
        """Truncated base64 is a parse error."""
        from json_storage.core import decode_value, StoreParseError

        with pytest.raises(StoreParseError):
            decode_value("abc", key="k")

    def test_decode_rejects_non_string(self):
        """Non-string stored values are a parse error."""
        from json_storage.core import decode_value, StoreParseError

        with pytest.raises(StoreParseError):
            decode_value(42, key="k")

    def test_decode_replaces_invalid_utf8(self):
        """Undecodable bytes become replacement characters."""
        from json_storage.core import decode_value

        encoded = base64.b64encode(b"ok\xff").decode("ascii")
        assert decode_value(encoded) == "ok\ufffd"

    def test_encode_replaces_lone_surrogates(self):
        """Lone surrogates encode as U+FFFD instead of failing."""
        from json_storage.core import encode_value, decode_value

        assert decode_value(encode_value("a\ud800b")) == "a\ufffdb"

    def test_encode_joins_surrogate_pairs(self):
        """A valid pair written as two code points encodes as one character."""
        from json_storage.core import encode_value

        assert encode_value("\ud83d\ude00") == encode_value("\U0001F600")


class TestLoad:
    """Test FileBackedKVStore.load()."""

    def test_missing_file_is_empty(self, store_path):
        """Missing file loads as an empty mapping and creates the directory only."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)

        assert store.load() == {}
        assert os.path.isdir(os.path.dirname(store_path))
        assert not os.path.exists(store_path)

    def test_invalid_json_raises_parse_error(self, store_path):
        """Corrupt content propagates as StoreParseError."""
        from json_storage.core import FileBackedKVStore, StoreParseError

        _write(store_path, "this is not json")

        with pytest.raises(StoreParseError) as exc_info:
            FileBackedKVStore(store_path).load()
        assert exc_info.value.path == store_path

    def test_empty_file_raises_parse_error(self, store_path):
        """An empty file is not valid JSON."""
        from json_storage.core import FileBackedKVStore, StoreParseError

        _write(store_path, "")

        with pytest.raises(StoreParseError):
            FileBackedKVStore(store_path).load()

    def test_non_object_json_raises_parse_error(self, store_path):
        """Top level must be an object."""
        from json_storage.core import FileBackedKVStore, StoreParseError

        _write(store_path, "[1, 2, 3]")

        with pytest.raises(StoreParseError):
            FileBackedKVStore(store_path).load()

    def test_directory_creation_failure_is_io_error(self, temp_store_dir):
        """A parent path that is a file cannot become a directory."""
        from json_storage.core import FileBackedKVStore, StoreIOError

        blocker = os.path.join(temp_store_dir, "blocker")
        _write(blocker, "x")

        with pytest.raises(StoreIOError):
            FileBackedKVStore(os.path.join(blocker, "sub", "store.json")).load()

    def test_unreadable_path_is_io_error(self, temp_store_dir):
        """A directory at the store path cannot be read as a file."""
        from json_storage.core import FileBackedKVStore, StoreIOError

        path = os.path.join(temp_store_dir, "is_a_dir.json")
        os.makedirs(path)

        with pytest.raises(StoreIOError):
            FileBackedKVStore(path).load()

    def test_bare_filename_needs_no_directory(self, temp_store_dir, monkeypatch):
        """Relative filename without a directory part works."""
        from json_storage.core import FileBackedKVStore

        monkeypatch.chdir(temp_store_dir)
        store = FileBackedKVStore("plain.json")
        store.set("a", "1")

        assert os.path.exists(os.path.join(temp_store_dir, "plain.json"))


class TestPersist:
    """Test FileBackedKVStore.persist()."""

    def test_pretty_printed_with_two_spaces(self, store_path):
        """File is indented JSON."""
        from json_storage.core import FileBackedKVStore

        FileBackedKVStore(store_path).persist({"a": "MQ=="})

        with open(store_path, encoding="utf-8") as f:
            assert f.read() == '{\n  "a": "MQ=="\n}'

    def test_overwrites_whole_file(self, store_path):
        """Persist replaces the previous content entirely."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.persist({"a": "MQ==", "b": "Mg=="})
        store.persist({"c": "Mw=="})

        assert store.load() == {"c": "Mw=="}

    def test_write_failure_is_io_error(self, temp_store_dir):
        """Writing onto a directory fails as StoreIOError."""
        from json_storage.core import FileBackedKVStore, StoreIOError

        path = os.path.join(temp_store_dir, "dir_target")
        os.makedirs(path)

        with pytest.raises(StoreIOError):
            FileBackedKVStore(path).persist({})

    def test_serialization_failure_keeps_previous_content(self, store_path):
        """A mapping that cannot be serialized never truncates the file."""
        from json_storage.core import FileBackedKVStore, StoreIOError

        store = FileBackedKVStore(store_path)
        store.set("keep", "1")
        with open(store_path, "rb") as f:
            before = f.read()

        with pytest.raises(StoreIOError):
            store.persist({"keep": "MQ==", "bad": object()})

        with open(store_path, "rb") as f:
            assert f.read() == before
        assert store.get("keep") == "1"

    def test_surrogate_key_written_as_escape(self, store_path):
        """Lone surrogates in keys survive as JSON escapes."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.persist({"k\ud800": "MQ==", "caffè": "Mg=="})

        with open(store_path, encoding="utf-8") as f:
            content = f.read()
        assert "k\\ud800" in content
        assert "caffè" in content
        assert store.load() == {"k\ud800": "MQ==", "caffè": "Mg=="}


class TestItemOperations:
    """Test save_item / read_item / delete_item."""

    def test_save_stores_base64_and_echoes_value(self, store_path):
        """Save writes the encoded value but returns the original."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        mapping = store.load()

        result = store.save_item(mapping, "greeting", "hello")

        assert result == {"success": True, "key": "greeting", "value": "hello"}
        with open(store_path, encoding="utf-8") as f:
            assert json.load(f) == {"greeting": "aGVsbG8="}

    def test_read_hit_and_miss(self, store_path):
        """Read decodes hits and returns an empty value on a miss."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        mapping = {"b": "Mg=="}

        assert store.read_item(mapping, "b") == {"success": True, "key": "b", "value": "2"}
        assert store.read_item(mapping, "a") == {"success": False, "key": "a", "value": ""}

    def test_read_never_writes(self, store_path):
        """A read against a missing file does not create it."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.read_item(store.load(), "missing")

        assert not os.path.exists(store_path)

    def test_delete_hit_persists(self, store_path):
        """Delete removes the key on disk."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.set("x", "1")
        mapping = store.load()

        result = store.delete_item(mapping, "x")

        assert result == {"success": True, "key": "x", "deleted": True}
        assert store.load() == {}

    def test_delete_miss_does_not_create_file(self, store_path):
        """Delete of a missing key is a normal result and writes nothing."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        result = store.delete_item(store.load(), "nope")

        assert result == {
            "success": False,
            "key": "nope",
            "deleted": False,
            "message": "Key not found",
        }
        assert not os.path.exists(store_path)

    def test_keys_are_opaque(self, store_path):
        """No trimming or case folding of keys."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.set("Key", "upper")
        store.set(" key ", "spaced")

        assert store.get("Key") == "upper"
        assert store.get(" key ") == "spaced"
        assert store.get("key") is None


class TestOneShotHelpers:
    """Test set / get / remove / contains / keys."""

    def test_round_trip_including_empty_string(self, store_path):
        """Saved values read back exactly."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.set("empty", "")
        store.set("unicode", "naïve ✓")

        assert store.get("empty") == ""
        assert store.get("unicode") == "naïve ✓"

    def test_overwrite(self, store_path):
        """Last save wins."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.set("k", "a")
        store.set("k", "b")

        assert store.get("k") == "b"

    def test_remove_twice(self, store_path):
        """Second remove reports a miss."""
        from json_storage.core import FileBackedKVStore

        store = FileBackedKVStore(store_path)
        store.set("k", "v")

        assert store.remove("k") is True
        assert store.remove("k") is False

    def test_persistence_across_instances(self, store_path):
        """A fresh store on the same path sees earlier writes."""
        from json_storage.core import FileBackedKVStore

        FileBackedKVStore(store_path).set("x", "1")
        fresh = FileBackedKVStore(store_path)

        assert fresh.contains("x")
        assert fresh.get("x") == "1"
        assert fresh.keys() == ["x"]

    def test_get_default_on_miss(self, store_path):
        """get() returns the default when the key is absent."""
        from json_storage.core import FileBackedKVStore

        assert FileBackedKVStore(store_path).get("nope", default="fallback") == "fallback"
