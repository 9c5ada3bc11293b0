"""
Authentication context models.

These models represent the resolved identity for API requests.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class AuthIdentity:
    """
    Verified identity from authentication.

    The default provider trusts the ``X-User-ID`` header and falls back to
    the configured default user.
    """
    user_id: int
    username: Optional[str] = None
