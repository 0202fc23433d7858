"""
PartyMap Admin - application bootstrap.

Wires settings, logging, the admin session and the API client together.
The UI layer creates one `AdminApp` on start-up and keeps it for the life of
the process:

    async with AdminApp() as admin:
        await auth_service.login(admin.client, email, password)
        page = await marker_service.list_markers(admin.client, admin.markers.filter)
"""

import logging
from typing import Optional

import httpx

from partymap_admin.auth.session import AuthSession
from partymap_admin.client import ApiClient
from partymap_admin.config import Settings, get_settings
from partymap_admin.services import auth_service
from partymap_admin.services.list_view import ListView

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Root logging setup; DEBUG when `debug` is on."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class AdminApp:
    """
    Application context: one session, one API client, one list view per table.

    Args:
        settings: App settings (default: cached settings)
        transport: Optional httpx transport for the API client
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.session = AuthSession(on_teardown=self._on_session_end)
        self.client = ApiClient(self.session, self.settings, transport=transport)
        self.markers = ListView(search_delay_ms=self.settings.search_debounce_ms)
        self.polygons = ListView(search_delay_ms=self.settings.search_debounce_ms)

    def start(self) -> None:
        """Start-up: restore a pre-issued admin token if one is configured."""
        configure_logging(self.settings)
        logger.info(f"Starting {self.settings.app_name} in {self.settings.app_env} mode...")
        if self.settings.admin_token:
            self.session.init(self.settings.admin_token)

    def _on_session_end(self) -> None:
        self.markers.close()
        self.polygons.close()

    async def logout(self) -> None:
        await auth_service.logout(self.client)

    async def aclose(self) -> None:
        logger.info("Shutting down...")
        self.markers.close()
        self.polygons.close()
        await self.client.aclose()

    async def __aenter__(self) -> "AdminApp":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
