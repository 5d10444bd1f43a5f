"""
mcp-council - MCP server for file-based LLM council deliberation.

Exposes peer review (Stage 2) and chairman synthesis (Stage 3) as MCP tools
over JSON-RPC on stdio, reading and writing artifacts under
.council/<title>/ and calling local LLM command-line tools.
"""

__version__ = "0.1.0"
