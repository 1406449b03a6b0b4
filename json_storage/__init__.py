"""
JSON Storage - key-value node backed by a flat JSON file

Structure:
    json_storage/
    ├── core/     # config, errors, base64 helpers, file store, batch driver
    ├── tools/    # Tool base class, registry, JsonStorageTool
    ├── cli.py    # command-line host
    └── api.py    # HTTP host (FastAPI)

Usage:
    from json_storage import Config, run_batch

    config = Config.from_env()
    results = run_batch("save", config.file_path, [{"key": "a", "value": "1"}])
"""

from .core import (
    Config,
    StoreError,
    StoreIOError,
    StoreParseError,
    ParameterError,
    FileBackedKVStore,
    Operation,
    Item,
    Invocation,
    BatchDriver,
    run_batch,
)

from .tools import (
    Tool,
    ToolDefinition,
    ToolRegistry,
    create_builtin_tools,
    create_registry,
)
from .tools.json_storage import JsonStorageTool, VERSION

__version__ = VERSION

__all__ = [
    # Core
    "Config",
    "StoreError",
    "StoreIOError",
    "StoreParseError",
    "ParameterError",
    "FileBackedKVStore",
    "Operation",
    "Item",
    "Invocation",
    "BatchDriver",
    "run_batch",
    # Tools
    "Tool",
    "ToolDefinition",
    "ToolRegistry",
    "create_builtin_tools",
    "create_registry",
    "JsonStorageTool",
]
