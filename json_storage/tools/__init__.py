"""
Tool System - how hosts discover and call the storage node.

Core concepts:
1. Tool - A pluggable unit with a definition and an execute() method
2. ToolDefinition - Name, description and parameter declarations
3. ToolRegistry - Registers and finds tools

Simple, no magic.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ToolDefinition:
    """
    Definition of a tool.

    Contains everything a host needs to render, select and call a tool.
    """
    name: str
    description: str

    # Parameters
    parameters: List[Dict[str, Any]] = field(default_factory=list)
    required_params: List[str] = field(default_factory=list)

    # Display / discovery metadata
    display_name: Optional[str] = None
    version: Optional[str] = None
    domain: str = "general"
    concepts: List[str] = field(default_factory=list)
    notice: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name or self.name,
            "description": self.description,
            "version": self.version,
            "domain": self.domain,
            "parameters": self.parameters,
            "required_params": self.required_params,
            "notice": self.notice,
        }


class Tool(ABC):
    """
    Base class for all tools.

    Subclasses implement:
    - get_definition(): Return ToolDefinition
    - execute(**kwargs): Run the tool
    """

    @abstractmethod
    def get_definition(self) -> ToolDefinition:
        """Return tool definition."""
        pass

    @abstractmethod
    def execute(self, **kwargs) -> Dict[str, Any]:
        """Execute the tool."""
        pass


class ToolRegistry:
    """
    Registry for tools.

    Usage:
        registry = ToolRegistry()
        for tool in create_builtin_tools(config):
            registry.register(tool)

        tool = registry.get("json_storage")
        result = tool.execute(operation="read", key="user")
    """

    def __init__(self):
        self._tools: Dict[str, Tool] = {}
        self._definitions: Dict[str, ToolDefinition] = {}

    def register(self, tool: Tool) -> None:
        """Register a single tool."""
        definition = tool.get_definition()
        if definition.name in self._tools:
            logger.warning(f"Replacing registered tool: {definition.name}")
        self._tools[definition.name] = tool
        self._definitions[definition.name] = definition
        logger.info(f"Registered tool: {definition.name}")

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def get_definition(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name."""
        return self._definitions.get(name)

    def get_all_definitions(self) -> Dict[str, ToolDefinition]:
        """Get all tool definitions."""
        return self._definitions.copy()

    def list_tools(self) -> List[str]:
        """List all tool names."""
        return list(self._tools.keys())

    def search(
        self,
        query: str,
        domain: str = None,
        limit: int = 10,
    ) -> List[ToolDefinition]:
        """Keyword search over names, descriptions and concepts."""
        query_lower = query.lower()
        results = []

        for name, definition in self._definitions.items():
            score = 0

            if query_lower in name.lower():
                score += 3

            if query_lower in definition.description.lower():
                score += 2

            if domain and definition.domain == domain:
                score += 1

            for concept in definition.concepts:
                if query_lower in concept.lower():
                    score += 1

            if score > 0:
                results.append((score, definition))

        # Sort by score, return top N
        results.sort(key=lambda x: x[0], reverse=True)
        return [r[1] for r in results[:limit]]


def create_builtin_tools(config) -> List[Tool]:
    """Create built-in tools."""
    from .json_storage import JsonStorageTool

    return [JsonStorageTool(config)]


def create_registry(config) -> ToolRegistry:
    """Registry pre-loaded with the built-in tools."""
    registry = ToolRegistry()
    for tool in create_builtin_tools(config):
        registry.register(tool)
    return registry
