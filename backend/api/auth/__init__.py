"""Bearer token authentication and host/guest middleware."""

from backend.api.auth.backend import AuthenticatedUser, TokenAuthBackend
from backend.api.auth.middleware import (
    RedirectIfAuthenticatedMiddleware,
    TrustHostsMiddleware,
    trusted_hosts_for,
)

__all__ = [
    "AuthenticatedUser",
    "TokenAuthBackend",
    "RedirectIfAuthenticatedMiddleware",
    "TrustHostsMiddleware",
    "trusted_hosts_for",
]
