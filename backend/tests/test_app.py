"""Tests for app wiring and the polygon check script."""

import importlib.util
from pathlib import Path

import httpx
import pytest

from partymap_admin.config import Settings
from partymap_admin.main import AdminApp

from conftest import SQUARE_PAIRS

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "check_polygon.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("check_polygon", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSettings:

    @pytest.mark.unit
    def test_api_base_url_by_environment(self):
        dev = Settings(app_env="development", backend_url_dev="http://localhost:5000", _env_file=None)
        prod = Settings(app_env="production", backend_url="https://api.partymap.io", _env_file=None)
        assert dev.api_base_url == "http://localhost:5000/api"
        assert prod.api_base_url == "https://api.partymap.io/api"
        assert prod.is_production


class TestAdminApp:

    @pytest.mark.anyio
    async def test_start_restores_configured_token(self, settings):
        settings = settings.model_copy(update={"admin_token": "preissued"})
        async with AdminApp(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200))) as app:
            assert app.session.token == "preissued"
            assert app.markers.filter.page == 1

    @pytest.mark.anyio
    async def test_logout_cancels_pending_searches(self, settings):
        app = AdminApp(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        app.start()
        app.session.init("abc")
        app.markers.search("ber")
        assert app.markers.search.is_pending()

        await app.logout()

        assert not app.session.is_authenticated
        assert not app.markers.search.is_pending()
        await app.aclose()


class TestCheckPolygonScript:

    @pytest.mark.unit
    def test_valid_polygon(self, capsys):
        script = _load_script()
        assert script.check_geometry("square", {"type": "Polygon", "coordinates": [SQUARE_PAIRS]})
        assert "Valid" in capsys.readouterr().out

    @pytest.mark.unit
    def test_open_polygon(self, capsys):
        script = _load_script()
        data = {"type": "Polygon", "coordinates": [SQUARE_PAIRS[:-1]]}
        assert not script.check_geometry("open", data)
        assert "must be closed" in capsys.readouterr().out
        assert script.check_geometry("open", data, close=True)

    @pytest.mark.unit
    def test_malformed_envelope(self):
        script = _load_script()
        assert not script.check_geometry("point", {"type": "Point", "coordinates": [0, 0]})
