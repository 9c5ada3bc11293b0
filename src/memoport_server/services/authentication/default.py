"""
Default authentication service implementation.

Trusts the ``X-User-ID`` header (integer user id) and falls back to the
configured default user when the header is absent. Intended for
single-user and trusted-proxy deployments.
"""
import logging
from typing import Optional

from scitrera_app_framework import Variables, get_extension

from .base import (
    AuthenticationError,
    AuthenticationService,
    AuthenticationServicePluginBase,
    EXT_AUTHENTICATION_SERVICE,
)
from ...config import MEMOPORT_DEFAULT_USER_ID, DEFAULT_MEMOPORT_DEFAULT_USER_ID
from ...models.auth import AuthIdentity


class HeaderAuthenticationService(AuthenticationService):
    """Header based authentication with a default user."""

    def __init__(self, default_user_id: int = DEFAULT_MEMOPORT_DEFAULT_USER_ID,
                 logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.default_user_id = default_user_id

    async def resolve_identity(self, user_id_header: Optional[str]) -> AuthIdentity:
        if user_id_header is None or not user_id_header.strip():
            return AuthIdentity(user_id=self.default_user_id)

        try:
            user_id = int(user_id_header.strip())
        except ValueError:
            raise AuthenticationError(f"invalid user id: {user_id_header}")

        if user_id <= 0:
            raise AuthenticationError(f"invalid user id: {user_id_header}")
        return AuthIdentity(user_id=user_id)


class HeaderAuthenticationServicePlugin(AuthenticationServicePluginBase):
    """Plugin to register the header authentication service."""
    PROVIDER_NAME = 'default'

    def initialize(self, v: Variables, logger: logging.Logger) -> HeaderAuthenticationService:
        default_user_id = v.environ(
            MEMOPORT_DEFAULT_USER_ID,
            default=DEFAULT_MEMOPORT_DEFAULT_USER_ID,
            type_fn=int,
        )
        return HeaderAuthenticationService(default_user_id=default_user_id, logger=logger)


def get_authentication_service(v: Variables = None) -> AuthenticationService:
    """Get the authentication service instance."""
    return get_extension(EXT_AUTHENTICATION_SERVICE, v)
