"""
MCP server over stdio.

Reads one JSON-RPC message per line from the input stream, handles it
completely (including the LLM subprocess), and writes at most one response
line before reading the next. Malformed lines are reported on stderr and
dropped without a response.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

from pydantic import ValidationError

from .. import __version__
from ..config import CouncilConfig
from ..core.emit import emit
from ..core.errors import InvalidArgumentError
from ..core.models import LLMRunner
from ..model_providers.cli_provider import make_runner
from .messages import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    JsonRpcRequest,
    JsonRpcResponse,
    RpcError,
    ToolCallParams,
    text_content,
)
from .tools import TOOLS, list_tools

SERVER_NAME = "mcp-council"
PROTOCOL_VERSION = "2024-11-05"


def parse_tool_call(params: Any) -> ToolCallParams:
    """Validate ``tools/call`` params; a missing name is a handler failure."""
    if params is None:
        raise InvalidArgumentError("Missing params")
    try:
        return ToolCallParams.model_validate(params)
    except ValidationError as e:
        raise InvalidArgumentError("Missing tool name") from e


class McpServer:
    """
    Sequential JSON-RPC dispatcher for the council tools.

    Usage:
        server = McpServer(config=load_council_config_defaults())
        asyncio.run(server.run())
    """

    def __init__(
        self,
        run_llm: Optional[LLMRunner] = None,
        config: Optional[CouncilConfig] = None,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        cwd: Optional[Path] = None
    ):
        self.config = config or CouncilConfig()
        self.run_llm = run_llm or make_runner(self.config.timeout, self.config.engines)
        self._input = input_stream or sys.stdin
        self._output = output_stream or sys.stdout
        self._cwd = cwd

    async def run(self) -> None:
        """Serve until end of input."""
        emit({"type": "server_start", "server": SERVER_NAME, "version": __version__})

        while True:
            line = await asyncio.to_thread(self._input.readline)
            if not line:
                break  # EOF

            response = await self.handle_line(line)
            if response is not None:
                self._write(response)

        emit({"type": "server_stop", "server": SERVER_NAME})

    def _write(self, response: JsonRpcResponse) -> None:
        self._output.write(response.to_json())
        self._output.write("\n")
        self._output.flush()

    async def handle_line(self, line: str) -> Optional[JsonRpcResponse]:
        """Handle one raw input line; None means nothing is written back."""
        line = line.strip()
        if not line:
            return None

        try:
            request = JsonRpcRequest.model_validate_json(line)
        except ValidationError as e:
            emit({
                "type": "parse_error",
                "msg": f"Failed to parse JSON-RPC request (ignored): {e.errors(include_url=False)[0]['msg']}",
                "line": line[:200]
            })
            return None

        return await self.handle_request(request)

    async def handle_request(self, request: JsonRpcRequest) -> Optional[JsonRpcResponse]:
        """Dispatch a parsed message and build its response (None for notifications)."""
        if request.has_unusable_id:
            emit({
                "type": "invalid_id",
                "msg": f"Invalid JSON-RPC id (ignored, treated as notification): {request.id!r}",
                "method": request.method
            })

        request_id = None if request.is_notification else request.id

        try:
            result = await self.dispatch(request)
        except RpcError as e:
            return self._failure(request, request_id, e.code, e.message)
        except Exception as e:
            return self._failure(request, request_id, INTERNAL_ERROR, str(e))

        if request.is_notification:
            return None
        return JsonRpcResponse.success(request_id, result)

    def _failure(self, request: JsonRpcRequest, request_id: Any, code: int, message: str) -> Optional[JsonRpcResponse]:
        if request.is_notification:
            emit({
                "type": "notification_error",
                "msg": f"{request.method} failed for notification: {message}",
                "code": code
            })
            return None
        return JsonRpcResponse.failure(request_id, code, message)

    async def dispatch(self, request: JsonRpcRequest) -> Any:
        """Route a method to its handler and return the JSON-RPC result."""
        if request.method == "initialize":
            return {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": SERVER_NAME, "version": __version__}
            }

        if request.method == "tools/list":
            return {"tools": list_tools()}

        if request.method == "tools/call":
            return await self.call_tool(request.params)

        raise RpcError(METHOD_NOT_FOUND, f"Method not found: {request.method}")

    async def call_tool(self, params: Any) -> dict:
        """Run a council tool and wrap its result as MCP text content."""
        call = parse_tool_call(params)

        spec = TOOLS.get(call.name)
        if spec is None:
            raise RpcError(METHOD_NOT_FOUND, f"Unknown tool: {call.name}")

        try:
            result = await spec.invoke(call.arguments, self.run_llm, self.config, self._cwd)
        except Exception as e:
            raise RpcError(INTERNAL_ERROR, f"{spec.failure_prefix}: {e}") from e

        return text_content(result.model_dump_json())
