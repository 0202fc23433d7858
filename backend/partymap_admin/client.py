"""
REST client for the PartyMap backend.

Wraps `httpx.AsyncClient`: attaches the admin bearer token to every request,
tears the session down on 401, and turns error responses into `ApiError`.
"""

import logging
from typing import Any, Optional

import httpx

from partymap_admin.auth.session import AuthSession
from partymap_admin.config import Settings, get_settings
from partymap_admin.exceptions import ApiError, AuthExpired

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
DEFAULT_ERROR_MESSAGE = "An error occurred"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return DEFAULT_ERROR_MESSAGE


class ApiClient:
    """
    Async client for `{backend}/api`.

    Args:
        session: Admin session supplying the bearer token
        settings: App settings (default: cached settings)
        transport: Optional httpx transport (tests use `httpx.MockTransport`)
    """

    def __init__(
        self,
        session: AuthSession,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or get_settings()
        self.session = session
        self._http = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        data: Optional[dict] = None,
        files: Any = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body (None when empty).

        Raises:
            AuthExpired: backend answered 401 (the session is torn down first)
            ApiError: any other error status, or the backend is unreachable
        """
        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                json=json,
                data=data,
                files=files,
                headers=self.session.authorization_header(),
            )
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(NETWORK_ERROR_MESSAGE) from e

        if response.status_code == 401:
            logger.warning(f"{method} {path} -> 401, ending session")
            self.session.teardown()
            raise AuthExpired()

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._http.aclose()
