"""
MCP protocol dispatcher.

Routes JSON-RPC requests to the handler for their method and always returns
exactly one response carrying the request id. Failures at any stage are
converted into JSON-RPC error responses:

- -32700 Parse error (``handle_json`` only)
- -32600 Invalid Request
- -32601 Method not found
- -32602 Invalid params (including unknown tools)
- -32603 Internal error (tool failures and unexpected faults)
"""

from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Union

import jsonschema
from pydantic import BaseModel, ValidationError

from .base import BaseTool, ToolExecutionError
from .config import Settings, get_settings
from .errors import (
    DispatchError,
    ErrorCode,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
)
from .protocol import (
    CallToolParams,
    CallToolResult,
    InitializeResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ListToolsResult,
    Method,
    PingResult,
    RequestId,
    ServerInfo,
    TextContent,
)
from .registry import ToolNotFoundError, ToolRegistry
from ._logging import get_logger, setup_logging

logger = get_logger(__name__)

Handler = Callable[[JsonRpcRequest], Awaitable[BaseModel]]


class ProtocolDispatcher:
    """Stateless per-request router over a ToolRegistry."""

    def __init__(self, registry: ToolRegistry, settings: Optional[Settings] = None) -> None:
        if registry is None:
            raise ValueError("registry is required")
        self.registry = registry
        self.settings = settings or get_settings()
        self._handlers: Dict[Method, Handler] = {
            Method.INITIALIZE: self._handle_initialize,
            Method.TOOLS_LIST: self._handle_tools_list,
            Method.TOOLS_CALL: self._handle_tools_call,
            Method.PING: self._handle_ping,
        }

    async def handle_request(
        self,
        request: Union[JsonRpcRequest, Mapping[str, Any]],
    ) -> JsonRpcResponse:
        """Handle one request; never raises for request or tool failures."""
        request_id = _extract_id(request)
        try:
            if not isinstance(request, JsonRpcRequest):
                request = _parse_request(request)

            logger.info(
                "Handling MCP request",
                method=request.method,
                request_id=request.id,
            )

            handler = self._resolve(request.method)
            result = await handler(request)
            return JsonRpcResponse(
                id=request.id,
                result=result.model_dump(mode="json", by_alias=True),
            )

        except InvalidRequestError as exc:
            logger.warning(
                "Invalid MCP request",
                request_id=request_id,
                error=exc.message,
            )
            return self._error_response(request_id, exc.code, exc.message, exc.data)

        except DispatchError as exc:
            return self._error_response(request_id, exc.code, exc.message, exc.data)

        except Exception as exc:
            logger.error(
                "Error handling MCP request",
                request_id=request_id,
                error=str(exc),
                exc_info=True,
            )
            return self._error_response(request_id, ErrorCode.INTERNAL_ERROR, "Internal error")

    async def handle_json(self, raw: Union[str, bytes]) -> Dict[str, Any]:
        """Decode a JSON request body, dispatch it and return the wire response."""
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            logger.warning("Invalid JSON in request body", error=str(exc))
            return self._error_response(
                None, ParseError.code, "Parse error", {"reason": str(exc)}
            ).to_dict()

        if not isinstance(payload, Mapping):
            response = self._error_response(
                None, InvalidRequestError.code, "Request must be a JSON object"
            )
        else:
            response = await self.handle_request(payload)
        return response.to_dict()

    def _resolve(self, method: str) -> Handler:
        try:
            return self._handlers[Method(method)]
        except ValueError:
            raise MethodNotFoundError(f"Method '{method}' not found") from None

    async def _handle_initialize(self, request: JsonRpcRequest) -> InitializeResult:
        return InitializeResult(
            protocol_version=self.settings.protocol_version,
            server_info=ServerInfo(
                name=self.settings.server_name,
                version=self.settings.server_version,
            ),
        )

    async def _handle_tools_list(self, request: JsonRpcRequest) -> ListToolsResult:
        return ListToolsResult(tools=[tool.info() for tool in self.registry.list()])

    async def _handle_tools_call(self, request: JsonRpcRequest) -> CallToolResult:
        try:
            params = CallToolParams.model_validate(request.params or {})
        except ValidationError as exc:
            raise InvalidParamsError(
                "Invalid params for tools/call",
                data={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc

        try:
            tool = self.registry.get(params.name)
        except ToolNotFoundError as exc:
            logger.warning(
                "Requested MCP tool not found",
                tool=params.name,
                request_id=request.id,
            )
            raise InvalidParamsError(str(exc)) from exc

        if self.settings.validate_arguments:
            self._validate_arguments(tool, params.arguments)

        value = await self._execute(tool, params.arguments, request.id)
        return CallToolResult(content=[TextContent(text=_serialize_result(value))])

    async def _handle_ping(self, request: JsonRpcRequest) -> PingResult:
        return PingResult(
            timestamp=datetime.now(timezone.utc).isoformat(),
            server=self.settings.server_name,
            version=self.settings.server_version,
        )

    def _validate_arguments(self, tool: BaseTool, arguments: Dict[str, Any]) -> None:
        schema = tool.input_schema().model_dump()
        try:
            jsonschema.validate(arguments, schema)
        except jsonschema.ValidationError as exc:
            raise InvalidParamsError(
                f"Invalid arguments for tool '{tool.name}': {exc.message}",
                data={"path": list(exc.absolute_path)},
            ) from exc

    async def _execute(self, tool: BaseTool, arguments: Dict[str, Any], request_id: RequestId) -> Any:
        started = time.perf_counter()
        logger.info(
            "Executing tool",
            tool=tool.name,
            arguments=list(arguments.keys()),
            request_id=request_id,
        )
        try:
            value = await tool.execute(arguments)
        except ToolExecutionError as exc:
            logger.warning(
                "Tool execution failed",
                tool=tool.name,
                error=str(exc),
                code=exc.code,
                request_id=request_id,
                duration_ms=_elapsed_ms(started),
            )
            raise InternalError(
                f"Tool execution failed: {exc}",
                data={"code": exc.code, "details": exc.details},
            ) from exc
        except Exception as exc:
            logger.error(
                "Tool execution crashed",
                tool=tool.name,
                error=str(exc),
                request_id=request_id,
                duration_ms=_elapsed_ms(started),
                exc_info=True,
            )
            raise InternalError(f"Tool execution failed: {exc}") from exc

        logger.info(
            "Tool execution succeeded",
            tool=tool.name,
            request_id=request_id,
            duration_ms=_elapsed_ms(started),
        )
        return value

    @staticmethod
    def _error_response(
        request_id: Optional[RequestId],
        code: int,
        message: str,
        data: Optional[Any] = None,
    ) -> JsonRpcResponse:
        return JsonRpcResponse(
            id=request_id,
            error=JsonRpcError(code=int(code), message=message, data=data),
        )


def create_dispatcher(
    tools: Iterable[BaseTool] = (),
    settings: Optional[Settings] = None,
) -> ProtocolDispatcher:
    """Build a registry from ``tools`` and wrap it in a dispatcher."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_json)
    enabled = set(settings.enabled_tools)

    registry = ToolRegistry()
    for tool in tools:
        if enabled and tool.name not in enabled:
            logger.info("Skipping disabled MCP tool", tool=tool.name)
            continue
        registry.register(tool)

    logger.info(
        "MCP dispatcher initialized",
        name=settings.server_name,
        version=settings.server_version,
        tools=list(registry.names()),
    )
    return ProtocolDispatcher(registry, settings)


def _parse_request(payload: Mapping[str, Any]) -> JsonRpcRequest:
    try:
        return JsonRpcRequest.model_validate(dict(payload))
    except (TypeError, ValueError) as exc:
        # pydantic.ValidationError is a ValueError
        raise InvalidRequestError("Invalid Request", data={"reason": str(exc)}) from exc


def _extract_id(request: Any) -> Optional[RequestId]:
    if isinstance(request, JsonRpcRequest):
        return request.id
    if isinstance(request, Mapping):
        candidate = request.get("id")
        if isinstance(candidate, (str, int, float)) and not isinstance(candidate, bool):
            return candidate
    return None


def _serialize_result(value: Any) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    try:
        return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise InternalError(f"Tool result is not JSON serializable: {exc}") from exc


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
