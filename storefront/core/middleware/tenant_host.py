"""Rewrite requests on ``{subdomain}.{base domain}`` to the path-based store route.

``acme.loukify.website/`` is served exactly like ``/store/acme``. Requests that
already target the API, the dashboard or static files pass through untouched,
as does every request on a host that does not name a tenant.
"""

import re

from starlette.types import ASGIApp, Receive, Scope, Send

from storefront.services.tenant_host import extract_subdomain

PASSTHROUGH_PREFIXES = (
    "/api",
    "/admin",
    "/auth",
    "/store",
    "/_next",
    "/static",
    "/docs",
    "/openapi.json",
)
STATIC_FILE_RE = re.compile(r"\.(ico|png|jpg|jpeg|svg|gif|webp|css|js|woff|woff2|ttf|eot)$")


def _should_skip(path: str) -> bool:
    return path.startswith(PASSTHROUGH_PREFIXES) or bool(STATIC_FILE_RE.search(path))


class TenantHostMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or _should_skip(scope["path"]):
            await self.app(scope, receive, send)
            return

        host = ""
        for name, value in scope["headers"]:
            if name == b"host":
                host = value.decode("latin-1")
                break

        subdomain = extract_subdomain(host, scope["path"])
        if subdomain is None:
            await self.app(scope, receive, send)
            return

        rest = scope["path"].rstrip("/")
        path = f"/store/{subdomain}{rest}"
        scope = dict(scope)
        scope["path"] = path
        scope["raw_path"] = path.encode()
        await self.app(scope, receive, send)
