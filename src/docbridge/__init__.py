"""
docbridge - expose a documented class as AI-callable tools.

Compiles JSDoc annotations on an exported class into a contract store, then
serves that contract over the Model Context Protocol, forwarding each tool
call to a remote HTTP RPC endpoint.

Packages
--------
core        Errors, logging, settings, secrets, contract types and store
extractor   Source scanner, JSDoc parser and contract extractor
bridge      MCP server, tool registry, RPC client and response shaping
cli         ``docbridge`` command line
"""

__version__ = "0.1.0"
