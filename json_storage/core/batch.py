"""
Batch Driver - run one operation over an ordered batch of items.

Flow:
1. Resolve operation and file path once for the whole batch
2. Load the store once
3. Apply the operation to each item in order (mutations persist immediately)
4. Return one result record per item

Failures (I/O, parse, bad parameters) either propagate or, with
continue_on_fail, collapse the batch into a single error record.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .errors import ParameterError
from .store import FileBackedKVStore

logger = logging.getLogger(__name__)


class Operation(Enum):
    """Operations the storage node supports."""
    SAVE = "save"
    READ = "read"
    DELETE = "delete"

    @property
    def mutating(self) -> bool:
        return self is not Operation.READ

    @classmethod
    def parse(cls, value: Union['Operation', str]) -> 'Operation':
        """Accept an Operation or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(op.value for op in cls)
            raise ParameterError(f"Unknown operation '{value}' (expected one of: {choices})")


@dataclass
class Item:
    """One unit of a batch: a key and, for save, a value."""
    key: str
    value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Item':
        if not isinstance(data, dict):
            raise ParameterError(f"Item must be a mapping, got {type(data).__name__}")
        return cls(key=data.get("key"), value=data.get("value"))


@dataclass
class Invocation:
    """Per-invocation configuration threaded through the driver."""
    operation: Operation
    file_path: str
    items: List[Item] = field(default_factory=list)
    continue_on_fail: bool = False

    def __post_init__(self):
        self.operation = Operation.parse(self.operation)
        self.items = [i if isinstance(i, Item) else Item.from_dict(i) for i in self.items]


class BatchDriver:
    """
    Executes invocations against file-backed stores.

    Usage:
        driver = BatchDriver()
        results = driver.run(Invocation(
            operation="save",
            file_path="data/custom_json.json",
            items=[Item("a", "1"), Item("b", "2")],
        ))
    """

    def run(self, invocation: Invocation) -> List[Dict[str, Any]]:
        """
        Run the batch and return one record per item, in input order.

        Raises:
            StoreError: on store or parameter failures when continue_on_fail is disabled
        """
        operation = invocation.operation
        store = FileBackedKVStore(invocation.file_path)

        try:
            mapping = store.load()
            results = [
                self._apply(store, mapping, operation, item)
                for item in invocation.items
            ]
        except Exception as e:
            if invocation.continue_on_fail:
                logger.warning(f"{operation.value} on {store.path} failed, continuing: {e}")
                return [{"success": False, "error": str(e)}]
            logger.error(f"{operation.value} on {store.path} failed: {e}")
            raise

        if operation.mutating:
            writes = sum(1 for r in results if r["success"])
            logger.info(f"{operation.value}: processed {len(results)} items, {writes} writes to {store.path}")
        else:
            logger.info(f"{operation.value}: processed {len(results)} items from {store.path}")
        return results

    def _apply(
        self,
        store: FileBackedKVStore,
        mapping: Dict[str, str],
        operation: Operation,
        item: Item,
    ) -> Dict[str, Any]:
        """Apply one operation to one item."""
        key = self._require_string(item.key, "key")
        logger.debug(f"{operation.value} key={key!r}")

        if operation is Operation.SAVE:
            value = self._require_string(item.value, "value")
            return store.save_item(mapping, key, value)
        if operation is Operation.READ:
            return store.read_item(mapping, key)
        return store.delete_item(mapping, key)

    @staticmethod
    def _require_string(value: Any, name: str) -> str:
        if value is None:
            raise ParameterError(f"Missing required parameter: {name}")
        if not isinstance(value, str):
            raise ParameterError(f"Parameter '{name}' must be a string, got {type(value).__name__}")
        return value


def run_batch(
    operation: Union[Operation, str],
    file_path: str,
    items: List[Union[Item, Dict[str, Any]]],
    continue_on_fail: bool = False,
) -> List[Dict[str, Any]]:
    """Convenience wrapper: build an Invocation and run it."""
    invocation = Invocation(
        operation=operation,
        file_path=file_path,
        items=items,
        continue_on_fail=continue_on_fail,
    )
    return BatchDriver().run(invocation)
