"""
Leantime MCP Server

Exposes Leantime tickets and projects as MCP tools backed by the
Leantime JSON-RPC API.
"""

__version__ = "1.0.0"
