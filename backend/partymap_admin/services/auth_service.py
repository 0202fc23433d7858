"""
Auth service - admin login/logout against the backend.
"""

import logging
from typing import Any

from partymap_admin.client import ApiClient
from partymap_admin.exceptions import ApiError
from partymap_admin.schemas.auth import AdminLogin, LoginResponse
from partymap_admin.schemas.common import parse_record, unwrap_data

logger = logging.getLogger(__name__)


async def login(client: ApiClient, email: str, password: str) -> LoginResponse:
    """
    Log in as admin and start the client's session with the returned token.

    Raises:
        pydantic.ValidationError: email/password fail local validation
        ApiError: backend rejected the credentials
    """
    credentials = AdminLogin(email=email, password=password)
    data = await client.post("/auth/admin/login", json=credentials.model_dump())
    result = parse_record(LoginResponse, unwrap_data(data))
    client.session.init(result.token, result.user)
    return result


async def logout(client: ApiClient) -> None:
    """
    Tell the backend we are leaving, then end the session.

    The session always ends, even if the backend call fails.
    """
    try:
        await client.post("/auth/admin/logout")
    except ApiError as e:
        logger.warning(f"Logout request failed: {e.message}")
    finally:
        client.session.teardown()


async def refresh_token(client: ApiClient) -> str:
    """Swap the current token for a fresh one."""
    data = unwrap_data(await client.post("/auth/admin/refresh"))
    token = data.get("token") if isinstance(data, dict) else None
    if not token:
        raise ApiError("Token refresh returned no token")
    client.session.init(token, client.session.user)
    return token


async def verify_token(client: ApiClient) -> Any:
    return await client.get("/auth/admin/verify")
