"""
JSON-RPC 2.0 wire models.

One request per input line, one response per output line. Only a string or
number ``id`` makes a message a request; anything else (absent, null,
boolean, array, object) is a notification that never gets a reply.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictStr

JSONRPC_VERSION = "2.0"

# Error codes
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class RpcError(Exception):
    """A failure that maps to one JSON-RPC error object."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def is_request_id(value: Any) -> bool:
    """True for ids that make a message a request (string or number)."""
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


class JsonRpcRequest(BaseModel):
    """An incoming request or notification."""
    model_config = ConfigDict(extra='ignore')

    jsonrpc: StrictStr
    id: Any = None
    method: StrictStr
    params: Any = None

    @property
    def is_notification(self) -> bool:
        return not is_request_id(self.id)

    @property
    def has_unusable_id(self) -> bool:
        """An id was sent but cannot be echoed back (boolean, array, object)."""
        return self.id is not None and self.is_notification


class ToolCallParams(BaseModel):
    """``params`` of a ``tools/call`` request."""
    model_config = ConfigDict(extra='ignore')

    name: StrictStr
    arguments: Any = None


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class JsonRpcResponse(BaseModel):
    """An outgoing response; exactly one of ``result``/``error`` is set."""
    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Optional[Any] = None
    error: Optional[JsonRpcError] = None

    @classmethod
    def success(cls, request_id: Any, result: Any) -> 'JsonRpcResponse':
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, code: int, message: str) -> 'JsonRpcResponse':
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    def to_json(self) -> str:
        """Serialize for the wire, omitting unset fields (``id`` included)."""
        return self.model_dump_json(exclude_none=True)


def text_content(text: str) -> dict:
    """Wrap tool output as MCP text content."""
    return {"content": [{"type": "text", "text": text}]}
