"""
MCP bridge server: list-tools and call-tool over stdio, backed by one contract.

Manifesto:
    The bridge is a translator, not a host. It never runs the documented
    code; it reads the compiled contract once, advertises each method as a
    tool, and turns every tool call into one authenticated HTTP request. A
    failed call is a tool result flagged ``isError``, never a crashed
    process, so one bad request cannot end the client's session.

Architecture:
    ::

        MCP client ──stdio──► mcp.server.lowlevel.Server
                                 │
                ListToolsRequest │ CallToolRequest
                                 ▼
                             BridgeApp
                     ┌───────────┼─────────────────────┐
                     ▼           ▼                     ▼
               ToolRegistry   RpcClient (httpx)   shape_response
               (resolve,      POST /rpc           (text, image via
                positional    Bearer secret        ImageStore, json)
                args)

    Handlers are registered directly in ``Server.request_handlers`` so the
    contract's type tags (``unknown``, ``Promise<string>``) reach the client
    as documentation instead of being validated as JSON Schema by the SDK.

Guardrails:
    ❌ DON'T: Let an exception escape ``call_tool``
    ✅ DO: Convert it to an error result and log it

    ❌ DON'T: Write anything to stdout
    ✅ DO: Log to stderr; stdout carries the protocol

Tags:
    mcp, bridge, stdio, rpc, docbridge
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import httpx
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from docbridge import __version__
from docbridge.bridge.client import RpcClient
from docbridge.bridge.config import BridgeConfig
from docbridge.bridge.images import ImageStore
from docbridge.bridge.responses import shape_response
from docbridge.bridge.tools import ToolDescriptor, ToolRegistry
from docbridge.core.errors import CallError
from docbridge.core.logging import LogContext, get_logger

logger = get_logger(__name__)


def error_result(message: str) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": message}], "isError": True}


class BridgeApp:
    """Transport-independent list/call logic over one loaded contract.

    Args:
        config: Resolved startup configuration
        transport: Optional httpx transport for the RPC client (tests)
    """

    def __init__(self, config: BridgeConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        settings = config.settings
        self.config = config
        self.registry = ToolRegistry.from_contract(config.contract)
        self.client = RpcClient(
            config.url,
            config.secret,
            rpc_path=settings.rpc_path,
            timeout=settings.request_timeout,
            transport=transport,
        )
        self.images = ImageStore(
            config.scratch_dir,
            quality=settings.jpeg_quality,
            reencode_subtypes=settings.reencode_subtypes,
        )
        self.preview_chars = settings.preview_chars

    def list_tools(self) -> list[ToolDescriptor]:
        return self.registry.descriptors()

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
        """Invoke one tool; always returns a result payload."""
        async with LogContext(tool=name):
            try:
                method = self.registry.resolve(name)
                args = self.registry.positional_args(method, arguments)
                response = await self.client.call(name, args)
                result = shape_response(
                    response, images=self.images, preview_chars=self.preview_chars
                )
            except CallError as e:
                logger.warning("tool_call_failed", **e.to_dict())
                return e.to_result()
            except Exception as e:
                logger.exception("tool_call_crashed", error=str(e))
                return error_result(f"{type(e).__name__}: {e}")

            logger.info("tool_call_completed", is_error=bool(result.get("isError", False)))
            return result


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def to_call_tool_result(payload: Mapping[str, Any]) -> types.CallToolResult:
    """Validate a result payload; a malformed pass-through envelope becomes an error result."""
    try:
        return types.CallToolResult.model_validate(payload)
    except ValidationError as e:
        logger.warning("invalid_tool_result", error=str(e))
        return types.CallToolResult.model_validate(
            error_result(f"Invalid tool result from endpoint: {e}")
        )


def create_server(app: BridgeApp) -> Server:
    """Build the MCP server for ``app``."""
    server: Server = Server(app.config.name, version=__version__)

    async def handle_list_tools(request: types.ListToolsRequest) -> types.ServerResult:
        tools = [to_mcp_tool(d) for d in app.list_tools()]
        logger.debug("tools_listed", count=len(tools))
        return types.ServerResult(types.ListToolsResult(tools=tools))

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        payload = await app.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(to_call_tool_result(payload))

    server.request_handlers[types.ListToolsRequest] = handle_list_tools
    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve_stdio(app: BridgeApp) -> None:
    """Serve ``app`` over stdin/stdout until the client disconnects."""
    server = create_server(app)
    logger.info("bridge_started", name=app.config.name, url=app.config.url, tools=len(app.registry))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_bridge(config: BridgeConfig) -> None:
    """Blocking entry point used by ``docbridge run``."""
    asyncio.run(serve_stdio(BridgeApp(config)))


__all__ = [
    "BridgeApp",
    "create_server",
    "error_result",
    "run_bridge",
    "serve_stdio",
    "to_call_tool_result",
    "to_mcp_tool",
]
