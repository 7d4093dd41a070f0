# =============================================================================
# referencime/__init__.py
# =============================================================================
# Core package of the Referencime MCP server.
#
# ARCHITECTURAL ROLE:
#   Everything that knows about the Referencime backend lives here:
#     - the tool registry (names, descriptions, argument schemas, paths)
#     - strict argument validation
#     - the HTTP gateway to the WordPress REST API
#     - one text formatter per tool
#
#   Nothing in this package imports FastMCP.  The MCP wiring lives in
#   referencime_mcp/, which depends on this package and never the reverse.
# =============================================================================

__version__ = "1.2.0"
