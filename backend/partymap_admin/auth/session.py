"""
Admin session state.

An explicit object handed to the API client and the UI layer: `init` when the
app starts (or after login), `teardown` on logout or when the backend answers
401.
"""

import logging
from typing import Callable, Optional

from partymap_admin.auth.jwt import token_expired
from partymap_admin.exceptions import AuthExpired
from partymap_admin.schemas.auth import AdminUser

logger = logging.getLogger(__name__)


class AuthSession:
    """Bearer token + user of the logged-in admin."""

    def __init__(self, on_teardown: Optional[Callable[[], None]] = None):
        self.token: Optional[str] = None
        self.user: Optional[AdminUser] = None
        self._on_teardown = on_teardown

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def init(self, token: str, user: Optional[AdminUser] = None) -> None:
        """
        Start the session with a token.

        Raises:
            AuthExpired: token is already past its expiry
        """
        if token_expired(token):
            self.teardown()
            raise AuthExpired()
        self.token = token
        self.user = user
        logger.info("Admin session started%s", f" for {user.email}" if user else "")

    def teardown(self) -> None:
        """Forget token and user. Safe to call more than once."""
        was_authenticated = self.is_authenticated
        self.token = None
        self.user = None
        if was_authenticated:
            logger.info("Admin session ended")
            if self._on_teardown is not None:
                self._on_teardown()

    def authorization_header(self) -> dict[str, str]:
        """`Authorization` header for the current token (empty when logged out)."""
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
