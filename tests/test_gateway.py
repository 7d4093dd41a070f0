"""Tests for the HTTP gateway to the Referencime API."""

import httpx
import pytest

from referencime.errors import (
    UpstreamApplicationError,
    UpstreamConnectionError,
    UpstreamHttpError,
)
from referencime.gateway import BackendGateway
from tests.conftest import API_URL, FakeBackend, run


def _gateway(settings, **backend_kwargs):
    backend = FakeBackend(**backend_kwargs)
    return BackendGateway(settings, transport=backend.transport), backend


class TestBackendGateway:
    def test_request_shape(self, settings, registry):
        gateway, backend = _gateway(settings, body={"success": True, "data": {"ok": 1}})
        tool = registry.get("detect_ranking_changes")

        run(gateway.call(tool, {"website_id": 3, "days": 7, "threshold": 3}))

        request = backend.last_request
        assert request.method == "POST"
        assert str(request.url) == f"{API_URL}/ai/detect-ranking-changes"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["Content-Type"] == "application/json"
        assert backend.last_json() == {"website_id": 3, "days": 7, "threshold": 3}

    def test_returns_data_verbatim(self, settings, registry):
        data = {"nested": [1, 2, {"x": None}]}
        gateway, _ = _gateway(settings, body={"success": True, "data": data})

        assert run(gateway.call(registry.get("list_user_websites"), {})) == data

    def test_http_error(self, settings, registry):
        gateway, _ = _gateway(settings, body={"message": "nope"}, status=503)

        with pytest.raises(UpstreamHttpError) as excinfo:
            run(gateway.call(registry.get("list_user_websites"), {}))

        assert excinfo.value.status == 503
        assert excinfo.value.status_text == "Service Unavailable"
        assert "503" in str(excinfo.value)

    def test_backend_failure_message(self, settings, registry):
        gateway, _ = _gateway(settings, body={"success": False, "message": "Website not found"})

        with pytest.raises(UpstreamApplicationError) as excinfo:
            run(gateway.call(registry.get("list_user_websites"), {}))

        assert excinfo.value.message == "Website not found"

    def test_missing_success_flag(self, settings, registry):
        gateway, _ = _gateway(settings, body={"data": {}})

        with pytest.raises(UpstreamApplicationError) as excinfo:
            run(gateway.call(registry.get("list_user_websites"), {}))

        assert excinfo.value.message == "Unknown error"

    def test_body_not_json(self, settings, registry):
        gateway, _ = _gateway(settings, body="<html>maintenance</html>")

        with pytest.raises(UpstreamApplicationError):
            run(gateway.call(registry.get("list_user_websites"), {}))

    def test_body_not_an_object(self, settings, registry):
        gateway, _ = _gateway(settings, body=[1, 2, 3])

        with pytest.raises(UpstreamApplicationError):
            run(gateway.call(registry.get("list_user_websites"), {}))

    def test_connection_error(self, settings, registry):
        gateway, _ = _gateway(settings, error=httpx.ConnectError("refused"))

        with pytest.raises(UpstreamConnectionError):
            run(gateway.call(registry.get("list_user_websites"), {}))

    def test_timeout(self, settings, registry):
        gateway, _ = _gateway(settings, error=httpx.ReadTimeout("slow"))

        with pytest.raises(UpstreamConnectionError) as excinfo:
            run(gateway.call(registry.get("list_user_websites"), {}))

        assert "5 seconds" in str(excinfo.value)
