"""
Authentication service interface.

The AuthenticationService turns request headers into an AuthIdentity. The
identity is all the transfer services know about the caller: exports are
scoped to it and imported memos are owned by it.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Request
from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import (
    MEMOPORT_AUTHENTICATION_SERVICE, DEFAULT_MEMOPORT_AUTHENTICATION_SERVICE,
    MEMOPORT_DEFAULT_USER_ID, DEFAULT_MEMOPORT_DEFAULT_USER_ID,
)
from ...models.auth import AuthIdentity

from .._constants import EXT_AUTHENTICATION_SERVICE

# Header names
HEADER_USER_ID = "X-User-ID"


class AuthenticationError(Exception):
    """Raised when authentication fails."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationService(ABC):
    """Abstract base class for authentication services."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    async def resolve_identity(self, user_id_header: Optional[str]) -> AuthIdentity:
        """
        Resolve the caller identity from the raw ``X-User-ID`` header value.

        Raises:
            AuthenticationError: If the header cannot identify a user
        """
        pass

    async def authenticate(self, request: Request) -> AuthIdentity:
        """Main entry point for endpoints."""
        identity = await self.resolve_identity(request.headers.get(HEADER_USER_ID))
        self.logger.debug("Resolved identity: user=%s", identity.user_id)
        return identity


# noinspection PyAbstractClass
class AuthenticationServicePluginBase(Plugin):
    """Base plugin for authentication service - extensible for custom implementations."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_AUTHENTICATION_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_AUTHENTICATION_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_AUTHENTICATION_SERVICE, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_AUTHENTICATION_SERVICE, DEFAULT_MEMOPORT_AUTHENTICATION_SERVICE)
        v.set_default_value(MEMOPORT_DEFAULT_USER_ID, DEFAULT_MEMOPORT_DEFAULT_USER_ID)
