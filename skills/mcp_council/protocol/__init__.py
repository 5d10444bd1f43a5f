"""
JSON-RPC (MCP) protocol layer.

Modules:
- messages: Pydantic wire models and error codes
- tools: Tool descriptors and stage routing
- server: The stdio request loop
"""

from .messages import JsonRpcRequest, JsonRpcResponse, ToolCallParams, RpcError, METHOD_NOT_FOUND, INTERNAL_ERROR
from .server import McpServer

__all__ = [
    'JsonRpcRequest',
    'JsonRpcResponse',
    'ToolCallParams',
    'RpcError',
    'METHOD_NOT_FOUND',
    'INTERNAL_ERROR',
    'McpServer',
]
