# =============================================================================
# referencime_mcp/__init__.py
# =============================================================================
# The MCP layer: turns the tool registry of the referencime package into a
# FastMCP server speaking over stdin/stdout.
#
#   dispatcher.py   Validator -> Gateway -> Formatter for one call, and the
#                   "always answer" error contract
#   mcp_server.py   FastMCP server built from the registry
#   logs.py         stderr logging (stdout belongs to the MCP transport)
#
# This layer holds no business logic.  Report wording lives in
# referencime/reports.py, backend details in referencime/gateway.py.
# =============================================================================
