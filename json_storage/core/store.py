"""
FileBackedKVStore: flat JSON file key-value storage.

The whole file is read on load and rewritten on every persist. Values are
stored base64-encoded; keys are stored as given.

No locking and no atomic rename: concurrent writers on the same path are
last-writer-wins, and a crash mid-write can leave a truncated file.
"""

import json
import logging
import os
from typing import Dict, List, Optional

from .encoding import decode_value, encode_value
from .errors import StoreIOError, StoreParseError

logger = logging.getLogger(__name__)


class FileBackedKVStore:
    """
    Key-value store persisted as a single JSON object.

    Usage:
        store = FileBackedKVStore("data/custom_json.json")

        # Batch style: load once, mutate, persist after each change
        mapping = store.load()
        store.save_item(mapping, "user", "Ada")
        store.read_item(mapping, "user")     # {"success": True, "key": "user", "value": "Ada"}
        store.delete_item(mapping, "user")

        # One-shot helpers (each does its own load/persist)
        store.set("user", "Ada")
        store.get("user")                     # "Ada"
        store.remove("user")                  # True
    """

    def __init__(self, path: str):
        self.path = str(path)

    def __repr__(self) -> str:
        return f"FileBackedKVStore(path={self.path!r})"

    # ------------------------------------------------------------------
    # Load / persist
    # ------------------------------------------------------------------

    def ensure_directory(self) -> None:
        """Create the parent directory (recursively) if it is missing."""
        directory = os.path.dirname(self.path)
        if not directory or os.path.isdir(directory):
            return
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise StoreIOError(f"Cannot create directory '{directory}': {e}", self.path) from e
        logger.debug(f"Created store directory: {directory}")

    def load(self) -> Dict[str, str]:
        """
        Load the whole store from disk.

        Creates the parent directory even for pure reads. A missing file is
        an empty store, not an error.

        Raises:
            StoreIOError: directory cannot be created or file cannot be read
            StoreParseError: file is not valid JSON or not a JSON object
        """
        self.ensure_directory()

        if not os.path.exists(self.path):
            logger.debug(f"Store file not found, starting empty: {self.path}")
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise StoreIOError(f"Cannot read store file '{self.path}': {e}", self.path) from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StoreParseError(f"Invalid JSON in store file '{self.path}': {e}", self.path) from e

        if not isinstance(data, dict):
            raise StoreParseError(
                f"Store file '{self.path}' must contain a JSON object, got {type(data).__name__}",
                self.path,
            )

        logger.debug(f"Loaded {len(data)} keys from {self.path}")
        return data

    def persist(self, mapping: Dict[str, str]) -> None:
        """
        Overwrite the store file with the full mapping.

        The document is serialized before the file is opened, so a
        serialization failure leaves the previous content intact. Lone
        surrogates in keys are written as JSON \\uXXXX escapes.

        Raises:
            StoreIOError: mapping cannot be serialized or file cannot be written
        """
        try:
            data = json.dumps(mapping, indent=2, ensure_ascii=False).encode("utf-8", errors="backslashreplace")
        except (TypeError, ValueError) as e:
            raise StoreIOError(f"Cannot serialize store '{self.path}': {e}", self.path) from e

        self.ensure_directory()
        try:
            with open(self.path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StoreIOError(f"Cannot write store file '{self.path}': {e}", self.path) from e
        logger.debug(f"Persisted {len(mapping)} keys to {self.path}")

    # ------------------------------------------------------------------
    # Per-item operations against a loaded mapping
    # ------------------------------------------------------------------

    def save_item(self, mapping: Dict[str, str], key: str, value: str) -> dict:
        """Store value under key and persist immediately. Echoes the plain value."""
        mapping[key] = encode_value(value)
        self.persist(mapping)
        return {"success": True, "key": key, "value": value}

    def read_item(self, mapping: Dict[str, str], key: str) -> dict:
        """Decode the value for key. A miss is a normal result with an empty value."""
        if key in mapping:
            return {"success": True, "key": key, "value": decode_value(mapping[key], key)}
        return {"success": False, "key": key, "value": ""}

    def delete_item(self, mapping: Dict[str, str], key: str) -> dict:
        """Remove key and persist immediately. A miss does not touch the file."""
        if key in mapping:
            del mapping[key]
            self.persist(mapping)
            return {"success": True, "key": key, "deleted": True}
        return {"success": False, "key": key, "deleted": False, "message": "Key not found"}

    # ------------------------------------------------------------------
    # One-shot helpers
    # ------------------------------------------------------------------

    def set(self, key: str, value: str) -> None:
        """Save a single key with its own load/persist cycle."""
        self.save_item(self.load(), key, value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the decoded value for key, or default on a miss."""
        result = self.read_item(self.load(), key)
        return result["value"] if result["success"] else default

    def remove(self, key: str) -> bool:
        """Delete a single key. Returns True if it existed."""
        return self.delete_item(self.load(), key)["success"]

    def contains(self, key: str) -> bool:
        return key in self.load()

    def keys(self) -> List[str]:
        return list(self.load().keys())
