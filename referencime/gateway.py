# =============================================================================
# referencime/gateway.py  —  Backend Gateway (HTTP client for Referencime)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Sends ONE POST request per tool call to the Referencime WordPress API and
#   unwraps the {success, data, message} envelope.
#
#       POST {api_url}{tool.path}
#       Authorization: Bearer {api_key}
#       Content-Type: application/json
#       body = normalized tool arguments
#
# FAILURES (see errors.py):
#   non-2xx status           -> UpstreamHttpError(status, status_text)
#   body not a JSON object   -> UpstreamApplicationError
#   success false or absent  -> UpstreamApplicationError(backend message)
#   network error / timeout  -> UpstreamConnectionError
#
# No retries.  The timeout comes from Settings (30 s by default).
# Failures are raised, not logged: the dispatcher logs each failed call once.
# =============================================================================

import logging
from typing import Any

import httpx

from referencime import __version__
from referencime.config import Settings
from referencime.errors import (
    UpstreamApplicationError,
    UpstreamConnectionError,
    UpstreamHttpError,
)
from referencime.models import BackendEnvelope, ToolDefinition

logger = logging.getLogger(__name__)


class BackendGateway:
    """Async client for the Referencime easy-links API.

    Args:
        settings: API key, base URL and timeout.
        transport: Optional httpx transport.  Tests pass an
            ``httpx.MockTransport`` here; production leaves it unset.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    def url_for(self, definition: ToolDefinition) -> str:
        return f"{self._settings.api_url}{definition.path}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"referencime-mcp/{__version__}",
        }

    async def call(self, definition: ToolDefinition, arguments: dict) -> Any:
        """POST ``arguments`` to the tool's endpoint and return ``data``."""
        url = self.url_for(definition)
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=arguments, headers=self._headers())
        except httpx.TimeoutException:
            raise UpstreamConnectionError(
                f"Referencime API did not answer within {self._settings.timeout:g} seconds"
            ) from None
        except httpx.HTTPError as exc:
            raise UpstreamConnectionError(f"Could not reach the Referencime API: {exc}") from None
        logger.debug("%s: %s answered %s", definition.name, url, response.status_code)
        return self._unwrap(response)

    @staticmethod
    def _unwrap(response: httpx.Response) -> Any:
        if not response.is_success:
            raise UpstreamHttpError(response.status_code, response.reason_phrase)
        try:
            body = response.json()
        except ValueError:
            raise UpstreamApplicationError("Response body is not valid JSON") from None
        return BackendEnvelope.from_json(body).unwrap()
