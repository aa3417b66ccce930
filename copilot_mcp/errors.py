"""JSON-RPC error codes and the exceptions the dispatcher maps onto them."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional


class ErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class DispatchError(Exception):
    """Base class for failures that become a JSON-RPC error response."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, *, data: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data


class ParseError(DispatchError):
    """Raised when the request body is not valid JSON."""

    code = ErrorCode.PARSE_ERROR


class InvalidRequestError(DispatchError):
    """Raised when the payload is not a JSON-RPC request."""

    code = ErrorCode.INVALID_REQUEST


class MethodNotFoundError(DispatchError):
    """Raised for methods outside the supported set."""

    code = ErrorCode.METHOD_NOT_FOUND


class InvalidParamsError(DispatchError):
    """Raised for malformed params or an unknown tool name."""

    code = ErrorCode.INVALID_PARAMS


class InternalError(DispatchError):
    """Raised when a tool fails or a response cannot be built."""

    code = ErrorCode.INTERNAL_ERROR
