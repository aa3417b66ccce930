"""
MCP Protocol - JSON-RPC message contracts.

Defines the message types exchanged with the dispatcher:
- JsonRpcRequest/JsonRpcResponse: JSON-RPC 2.0 envelopes
- JsonRpcError: Structured error member
- Result payloads for initialize, tools/list, tools/call and ping
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, model_validator

JSONRPC_VERSION = "2.0"

RequestId = Union[StrictStr, StrictInt, StrictFloat]


class Method(str, Enum):
    """Protocol methods understood by the dispatcher."""
    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    PING = "ping"


class JsonRpcRequest(BaseModel):
    """Incoming JSON-RPC request."""
    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = Field(..., description="Protocol version marker")
    id: RequestId = Field(..., description="Caller correlation token, echoed verbatim")
    method: StrictStr
    params: Optional[Dict[str, Any]] = Field(default=None, description="Method-specific payload")


class JsonRpcError(BaseModel):
    """Error member of a failed response."""
    code: int
    message: str
    data: Optional[Any] = None


class JsonRpcResponse(BaseModel):
    """Outgoing JSON-RPC response carrying exactly one of result/error."""
    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    # None only when the request id could not be read (invalid request, parse error)
    id: Optional[RequestId] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[JsonRpcError] = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "JsonRpcResponse":
        if (self.result is None) == (self.error is None):
            raise ValueError("response must carry exactly one of 'result' or 'error'")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation, omitting the unused member."""
        payload: Dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            error: Dict[str, Any] = {"code": self.error.code, "message": self.error.message}
            if self.error.data is not None:
                error["data"] = self.error.data
            payload["error"] = error
        else:
            payload["result"] = self.result
        return payload


# initialize

class ToolsCapability(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    list_changed: bool = Field(default=False, alias="listChanged")


class ServerCapabilities(BaseModel):
    tools: ToolsCapability = Field(default_factory=ToolsCapability)


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(..., alias="protocolVersion")
    capabilities: ServerCapabilities = Field(default_factory=ServerCapabilities)
    server_info: ServerInfo = Field(..., alias="serverInfo")


# tools/list

class ToolInputSchema(BaseModel):
    """JSON schema advertised for a tool's arguments."""
    type: Literal["object"] = "object"
    properties: Dict[str, Any] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)


class ToolInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: ToolInputSchema = Field(..., alias="inputSchema")


class ListToolsResult(BaseModel):
    tools: List[ToolInfo] = Field(default_factory=list)


# tools/call

class CallToolParams(BaseModel):
    """Params of a tools/call request."""
    name: StrictStr
    arguments: Dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    content: List[TextContent]


# ping

class PingResult(BaseModel):
    status: Literal["ok"] = "ok"
    timestamp: str = Field(..., description="ISO-8601 UTC time the ping was answered")
    server: str
    version: str
