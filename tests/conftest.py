"""
Pytest configuration and fixtures.

Provides:
- Settings isolated from the process environment
- echo/boom tools and a dispatcher wired with them
"""

import pytest

from copilot_mcp.base import FunctionTool, ToolExecutionError
from copilot_mcp.config import Settings
from copilot_mcp.dispatcher import ProtocolDispatcher
from copilot_mcp.registry import ToolRegistry


async def _echo(arguments):
    """Return the arguments unchanged."""
    return arguments


async def _boom(arguments):
    raise RuntimeError("kaboom")


async def _quota(arguments):
    raise ToolExecutionError(
        "Quota exhausted",
        code="quota_exceeded",
        details={"limit": 10},
    )


@pytest.fixture
def settings():
    """Settings with test identity, ignoring any .env file."""
    return Settings(
        _env_file=None,
        server_name="Test MCP Server",
        server_version="1.0.0-test",
    )


@pytest.fixture
def echo_tool():
    return FunctionTool(
        "echo",
        _echo,
        parameters={"x": {"type": "number", "description": "Value to echo"}},
    )


@pytest.fixture
def boom_tool():
    return FunctionTool("boom", _boom, description="Always fails")


@pytest.fixture
def quota_tool():
    return FunctionTool("quota", _quota, description="Fails with a domain error")


@pytest.fixture
def registry(echo_tool, boom_tool):
    """Registry holding echo then boom."""
    registry = ToolRegistry()
    registry.register(echo_tool)
    registry.register(boom_tool)
    return registry


@pytest.fixture
def dispatcher(registry, settings):
    return ProtocolDispatcher(registry, settings)
