"""
Store errors.

Two failure kinds come from the store itself (I/O and parse); parameter
errors come from the host payload. All share StoreError so the batch
driver can treat them identically.
"""


class StoreError(Exception):
    """Base class for every failure the storage node can raise."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.message = message
        self.path = path


class StoreIOError(StoreError):
    """Directory or file could not be created, read or written."""


class StoreParseError(StoreError):
    """Existing file content is not a JSON object of base64 strings."""


class ParameterError(StoreError):
    """Invalid operation, key or value passed by the host."""
