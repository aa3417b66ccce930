"""In-memory tool registry keyed by tool name."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .base import BaseTool
from ._logging import get_logger

logger = get_logger(__name__)


class ToolNotFoundError(LookupError):
    """Raised when the requested tool is missing."""


class ToolRegistry:
    """
    Ownership table from tool name to tool.

    Populated at startup and only read while serving requests. Iteration
    follows insertion order, which makes tools/list output deterministic.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """
        Register a tool under ``tool.name``.

        Registering a name twice replaces the earlier tool (last write wins).
        The name keeps its original position in ``list()``.
        """
        if tool.name in self._tools:
            logger.warning(
                "Replacing registered MCP tool",
                tool=tool.name,
                previous=repr(self._tools[tool.name]),
            )
        self._tools[tool.name] = tool
        logger.info(
            "Registered MCP tool",
            tool=tool.name,
            parameters=list(tool.parameters.keys()),
        )

    def get(self, name: str) -> BaseTool:
        """Return the tool registered as ``name`` or raise ToolNotFoundError."""
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(f"Tool '{name}' not found") from None

    def list(self) -> List[BaseTool]:
        """Return all tools in registration order."""
        return list(self._tools.values())

    def names(self) -> Tuple[str, ...]:
        return tuple(self._tools.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
