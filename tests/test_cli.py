from unittest.mock import patch

import httpx
from typer.testing import CliRunner

from bluemoon import cli
from bluemoon.ui import api_client, validation

runner = CliRunner()

LOGIN = {
    "success": True,
    "data": {"_id": "u1", "username": "admin", "role": "admin", "token": "jwt"},
}


def _patch_client(monkeypatch, backend):
    real = api_client.BlueMoonClient

    def factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(backend.handler)
        return real("http://backend.test", **kwargs)

    monkeypatch.setattr(api_client, "BlueMoonClient", factory)


def test_doctor_reports_failure():
    with patch.object(validation, "validate_api_url", return_value=[]), \
            patch.object(validation, "validate_backend_connection",
                         return_value=["Backend connection failed: refused"]):
        result = runner.invoke(cli.app, ["doctor"])
    assert result.exit_code == 1
    assert "Backend connection failed" in result.output


def test_doctor_all_good():
    with patch.object(validation, "validate_api_url", return_value=[]), \
            patch.object(validation, "validate_backend_connection", return_value=[]):
        result = runner.invoke(cli.app, ["doctor"])
    assert result.exit_code == 0
    assert "all good" in result.output


def test_validate_api_url_rejects_non_http(monkeypatch):
    monkeypatch.setattr(validation.settings, "API_URL", "ftp://example.org")
    assert validation.validate_api_url()


def test_stats_prints_series(monkeypatch, backend):
    _patch_client(monkeypatch, backend)
    backend.on("POST", "/api/users/login", LOGIN)
    backend.on("GET", "/api/statistics/dashboard", {
        "counts": {"households": 5, "residents": 12},
        "financials": {"monthlyRevenue": 1000, "revenueByType": {"service": 1000}},
    })
    result = runner.invoke(cli.app, ["stats", "--username", "admin", "--password", "secret"])
    assert result.exit_code == 0, result.output
    assert "service: 1.000 VND (100%)" in result.output
    assert "Th6" in result.output
    assert backend.calls("GET")[0].headers["Authorization"] == "Bearer jwt"


def test_stats_login_failure(monkeypatch, backend):
    _patch_client(monkeypatch, backend)
    backend.on("POST", "/api/users/login", {"message": "Sai mật khẩu"}, status=401)
    result = runner.invoke(cli.app, ["stats", "--username", "admin", "--password", "x"])
    assert result.exit_code == 1
    assert "Sai mật khẩu" in result.output
