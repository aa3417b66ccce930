"""
Model Context Protocol (MCP) dispatcher for GitHub Copilot tools.

Usage:
    from copilot_mcp import FunctionTool, create_dispatcher

    async def echo(arguments):
        return arguments

    dispatcher = create_dispatcher([FunctionTool("echo", echo, parameters={"x": {"type": "number"}})])
    response = await dispatcher.handle_request(
        {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": {"name": "echo", "arguments": {"x": 1}}}
    )
"""

from importlib import metadata as _metadata

from .base import BaseTool, FunctionTool, ToolExecutionError
from .config import Settings, get_settings
from .dispatcher import ProtocolDispatcher, create_dispatcher
from .errors import ErrorCode
from .protocol import JsonRpcError, JsonRpcRequest, JsonRpcResponse, Method
from .registry import ToolNotFoundError, ToolRegistry


def version() -> str:
    """Return package version if installed, else development placeholder."""
    try:
        return _metadata.version("copilot-mcp-server")
    except _metadata.PackageNotFoundError:  # pragma: no cover - dev mode
        return "0.0.0-dev"


__all__ = [
    "BaseTool",
    "ErrorCode",
    "FunctionTool",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Method",
    "ProtocolDispatcher",
    "Settings",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolRegistry",
    "create_dispatcher",
    "get_settings",
    "version",
]
