"""
Default HTTP middleware for host trust and guest-only pages.

TrustHostsMiddleware only accepts Host headers belonging to the
application URL (the host itself and its subdomains).
RedirectIfAuthenticatedMiddleware sends signed-in users away from pages
meant for guests, such as login and registration.

Dependencies: starlette
System role: Request filtering ahead of the routers
"""

import ipaddress
from typing import Awaitable, Callable, Iterable, Sequence
from urllib.parse import urlsplit

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

CallNext = Callable[[Request], Awaitable[Response]]


def _is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def trusted_hosts_for(url: str, extra: Iterable[str] = ()) -> list[str]:
    """
    Build the Host header allow-list for an application URL.

    The URL host and every subdomain of it are trusted. IP addresses
    have no subdomains. A URL without a host trusts everything.

    Args:
        url: Public application URL (APP_URL)
        extra: Additional host patterns to accept

    Returns:
        list[str]: Patterns for Starlette's TrustedHostMiddleware

    Usage:
        trusted_hosts_for("https://example.com")
        # ["example.com", "*.example.com"]
    """
    host = urlsplit(url).hostname
    if not host:
        return ["*"]

    hosts = [host]
    if not _is_ip_address(host):
        hosts.append(f"*.{host}")
    for pattern in extra:
        if pattern not in hosts:
            hosts.append(pattern)
    return hosts


class TrustHostsMiddleware(TrustedHostMiddleware):
    """
    Reject requests whose Host header is not under the application URL.

    Paths in exempt_paths skip the check; load balancer health checks
    address tasks by IP.
    """

    def __init__(
        self,
        app: ASGIApp,
        url: str,
        extra_hosts: Sequence[str] = (),
        exempt_paths: Sequence[str] = (),
    ) -> None:
        super().__init__(
            app,
            allowed_hosts=trusted_hosts_for(url, extra_hosts),
            www_redirect=False,
        )
        self.exempt_paths = frozenset(exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket") and scope["path"] in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


class RedirectIfAuthenticatedMiddleware(BaseHTTPMiddleware):
    """Redirect authenticated users away from guest-only paths."""

    def __init__(
        self,
        app: ASGIApp,
        home_path: str = "/",
        guest_paths: Sequence[str] = ("/login", "/register"),
    ) -> None:
        super().__init__(app)
        self.home_path = home_path
        self.guest_paths = frozenset(path.rstrip("/") or "/" for path in guest_paths)

    def is_guest_path(self, path: str) -> bool:
        return (path.rstrip("/") or "/") in self.guest_paths

    async def handle(self, request: Request, call_next: CallNext) -> Response:
        """Redirect to home_path if a signed-in user requests a guest page."""
        user = request.scope.get("user")
        if (
            user is not None
            and user.is_authenticated
            and self.is_guest_path(request.url.path)
        ):
            return RedirectResponse(self.home_path, status_code=302)
        return await call_next(request)

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        return await self.handle(request, call_next)
