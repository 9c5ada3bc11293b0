"""
Authentication service for memoport.

Resolves the caller identity that scopes exports and owns imported memos.
"""
from .base import (
    AuthenticationService,
    AuthenticationServicePluginBase,
    AuthenticationError,
    EXT_AUTHENTICATION_SERVICE,
    HEADER_USER_ID,
)
from .default import (
    HeaderAuthenticationService,
    HeaderAuthenticationServicePlugin,
    get_authentication_service,
)

__all__ = [
    "AuthenticationService",
    "AuthenticationServicePluginBase",
    "AuthenticationError",
    "EXT_AUTHENTICATION_SERVICE",
    "HEADER_USER_ID",
    "HeaderAuthenticationService",
    "HeaderAuthenticationServicePlugin",
    "get_authentication_service",
]
