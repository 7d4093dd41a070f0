# =============================================================================
# referencime_mcp/dispatcher.py  —  One tool call, start to finish
# =============================================================================
#
# HOW A CALL FLOWS:
#   1. look the tool up in the registry            (UnknownToolError)
#   2. validate the caller's arguments             (ValidationError)
#   3. POST them to the backend                    (Upstream*Error)
#   4. render the backend's data as a text report  (MalformedPayloadError)
#
# THE "ALWAYS ANSWER" CONTRACT:
#   dispatch() never raises for a single call.  Whatever goes wrong, the
#   caller receives a Report with is_error=True and a readable message, so
#   the client always has something to show the user.
# =============================================================================

import logging

from referencime.errors import ReferencimeError
from referencime.gateway import BackendGateway
from referencime.models import Report, ToolInvocation
from referencime.registry import ToolRegistry
from referencime.validation import validate_arguments
from referencime_mcp.logs import dump, log_error, log_request, log_response, log_status

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs Validator → Gateway → Formatter for each incoming call."""

    def __init__(self, registry: ToolRegistry, gateway: BackendGateway):
        self._registry = registry
        self._gateway = gateway

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def dispatch(self, name: str, arguments=None) -> Report:
        """Handle one call and return its report (never raises)."""
        log_request(name, arguments)
        try:
            definition = self._registry.get(name)
            normalized = validate_arguments(definition, arguments)
            log_status(f"POST {definition.path} {dump(normalized)}")
            data = await self._gateway.call(definition, normalized)
            text = definition.formatter(data, normalized)
        except ReferencimeError as exc:
            log_error(name, str(exc))
            return Report.error(str(exc))
        except Exception as exc:
            logger.exception("Unexpected failure while handling %s", name)
            return Report.error(f"Unexpected error in {name}: {exc}")

        log_response(name, text)
        return Report(text=text)

    async def handle(self, invocation: ToolInvocation) -> Report:
        """Entry point of the MCP server tools."""
        return await self.dispatch(invocation.name, invocation.arguments)
