from typing import Any, Dict, List, Optional

from . import Tool, ToolDefinition
from ..core.batch import BatchDriver, Invocation, Item, Operation
from ..core.config import Config
from ..core.errors import ParameterError

VERSION = "0.1.7"


class JsonStorageTool(Tool):
    """Save, read and delete key-value pairs in a JSON file."""

    version = VERSION

    def __init__(self, config: Config = None, driver: BatchDriver = None):
        self._config = config or Config.from_env()
        self._driver = driver or BatchDriver()

    def get_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name="json_storage",
            display_name=f"JSON Storage {self.version}",
            version=self.version,
            description="Store and retrieve key-value pairs in a JSON file",
            parameters=[
                {
                    "name": "operation",
                    "type": "options",
                    "options": [
                        {"name": "Save", "value": "save", "description": "Save a key-value pair to the JSON file"},
                        {"name": "Read", "value": "read", "description": "Read a value by key from the JSON file"},
                        {"name": "Delete", "value": "delete", "description": "Delete a key-value pair from the JSON file"},
                    ],
                    "default": "save",
                },
                {
                    "name": "key",
                    "type": "string",
                    "default": "",
                    "show_for": ["save", "read", "delete"],
                    "description": "The key to save, retrieve or delete",
                },
                {
                    "name": "value",
                    "type": "string",
                    "default": "",
                    "show_for": ["save"],
                    "description": "The value to save",
                },
                {
                    "name": "file_path",
                    "type": "string",
                    "default": self._config.file_path,
                    "description": "Full path to the JSON file (directory will be created if it does not exist)",
                },
                {
                    "name": "continue_on_fail",
                    "type": "boolean",
                    "default": self._config.continue_on_fail,
                    "description": "Return an error record instead of failing the run",
                },
            ],
            required_params=["operation", "key", "file_path"],
            domain="storage",
            concepts=["store", "save", "read", "delete", "key-value", "json", "file"],
            notice="Values are stored as base64 encoded strings in the JSON file",
        )

    def execute(
        self,
        operation: str = "save",
        file_path: Optional[str] = None,
        items: Optional[List[Dict[str, Any]]] = None,
        key: Optional[str] = None,
        value: Optional[str] = None,
        continue_on_fail: Optional[bool] = None,
        **kwargs,
    ) -> Dict[str, Any]:
        """
        Run the node over a batch.

        Pass either `items` (list of {"key", "value"}) or a single key/value.
        Returns {"items": [record, ...]}.
        """
        if items is None:
            if key is None:
                raise ParameterError("Missing required parameter: key")
            items = [Item(key=key, value=value)]

        invocation = Invocation(
            operation=Operation.parse(operation),
            file_path=file_path or self._config.file_path,
            items=items,
            continue_on_fail=self._config.continue_on_fail if continue_on_fail is None else continue_on_fail,
        )
        return {"items": self._driver.run(invocation)}
