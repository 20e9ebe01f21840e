"""Tests for the request logging middleware."""

import logging

from app.core.middleware import loggable_path


class TestLoggablePath:

    def test_masks_code_in_validate_and_redeem_paths(self):
        assert loggable_path("/api/v1/codigos-acceso/validar/ABCD1234") == "/api/v1/codigos-acceso/validar/******34"
        assert loggable_path("/api/v1/accesos-temporales/acceder/ABCD1234") == "/api/v1/accesos-temporales/acceder/******34"

    def test_other_paths_unchanged(self):
        assert loggable_path("/api/v1/codigos-acceso/inventario/42") == "/api/v1/codigos-acceso/inventario/42"
        assert loggable_path("/api/v1/health") == "/api/v1/health"


class TestRequestLog:

    def test_code_never_logged_in_clear(self, client, inventory, caplog):
        codigo = client.post(
            "/api/v1/codigos-acceso/generar/42", json={"horas": 1}
        ).json()["data"]["codigo"]

        with caplog.at_level(logging.INFO, logger="app.core.middleware"):
            response = client.get(f"/api/v1/codigos-acceso/validar/{codigo}")

        assert "X-Process-Time" in response.headers
        request_logs = [r.getMessage() for r in caplog.records if r.name == "app.core.middleware"]
        assert any("/validar/******" in m and "Status: 200" in m for m in request_logs)
        assert not any(codigo in m for m in request_logs)
