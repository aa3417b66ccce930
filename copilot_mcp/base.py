"""Base abstractions for MCP tools."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from .protocol import ToolInfo, ToolInputSchema

ToolFunction = Callable[[Dict[str, Any]], Awaitable[Any]]


class ToolExecutionError(RuntimeError):
    """Raised by a tool when it cannot produce a result."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "tool_error",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class BaseTool(ABC):
    """
    Abstract base class for MCP tools.

    Subclasses set ``name``, ``description`` and ``parameters`` (parameter
    name -> JSON schema fragment) and implement ``execute``.
    """

    name: str
    description: str = ""
    parameters: Mapping[str, Dict[str, Any]] = MappingProxyType({})

    def input_schema(self) -> ToolInputSchema:
        """Schema advertised on tools/list; every declared parameter is required."""
        return ToolInputSchema(
            properties=dict(self.parameters),
            required=list(self.parameters.keys()),
        )

    def info(self) -> ToolInfo:
        """Return the tools/list projection of this tool."""
        return ToolInfo(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema(),
        )

    @abstractmethod
    async def execute(self, arguments: Dict[str, Any]) -> Any:
        """
        Run the tool.

        Args:
            arguments: The ``arguments`` object of the tools/call request

        Returns:
            Any JSON-serializable value

        Raises:
            Exception: Any failure; the dispatcher reports it as an internal error
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


class FunctionTool(BaseTool):
    """Adapter exposing an async callable as a tool."""

    def __init__(
        self,
        name: str,
        func: ToolFunction,
        *,
        description: str = "",
        parameters: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Tool '{name}' must wrap an async function")
        self.name = name
        self.description = description or (inspect.getdoc(func) or "")
        self.parameters = dict(parameters or {})
        self._func = func

    async def execute(self, arguments: Dict[str, Any]) -> Any:
        return await self._func(arguments)
