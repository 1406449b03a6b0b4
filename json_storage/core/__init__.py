"""
JSON Storage core

1. config   - Config dataclass, created once from the environment
2. errors   - StoreError hierarchy
3. encoding - base64 value helpers
4. store    - FileBackedKVStore (load / persist / per-item operations)
5. batch    - Operation, Item, Invocation, BatchDriver
"""

from .config import Config
from .errors import StoreError, StoreIOError, StoreParseError, ParameterError
from .encoding import encode_value, decode_value
from .store import FileBackedKVStore
from .batch import Operation, Item, Invocation, BatchDriver, run_batch

__all__ = [
    'Config',
    'StoreError', 'StoreIOError', 'StoreParseError', 'ParameterError',
    'encode_value', 'decode_value',
    'FileBackedKVStore',
    'Operation', 'Item', 'Invocation', 'BatchDriver', 'run_batch',
]
