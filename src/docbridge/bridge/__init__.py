"""Protocol bridge: MCP tools backed by a remote HTTP RPC endpoint.

Modules
-------
config      load_bridge_config() startup step + BridgeConfig
tools       ToolRegistry + input schema generation
client      RpcClient (httpx)
images      ImageStore + Pillow re-encoding
responses   shape_response() content-type dispatch
server      BridgeApp + MCP low-level server over stdio
"""

from docbridge.bridge.config import BridgeConfig, load_bridge_config
from docbridge.bridge.server import BridgeApp, create_server, run_bridge
from docbridge.bridge.tools import ToolRegistry

__all__ = [
    "BridgeApp",
    "BridgeConfig",
    "ToolRegistry",
    "create_server",
    "load_bridge_config",
    "run_bridge",
]
