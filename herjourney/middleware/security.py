"""Security headers middleware.

Every response carries ``SECURITY_HEADERS``.  The content security policy
depends on what was served: JSON gets a policy that loads nothing, while the
interactive docs pages keep their own scripts and styles and only refuse
framing.  Only non-HTML responses are marked ``no-store``.
"""

from __future__ import annotations

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
    "Cross-Origin-Opener-Policy": "same-origin",
}

JSON_CSP = "default-src 'none'; frame-ancestors 'none'; sandbox"
DOCS_CSP = "frame-ancestors 'none'"


def _is_docs_page(content_type: str) -> bool:
    return content_type.startswith("text/html")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        if _is_docs_page(response.headers.get("content-type", "")):
            response.headers.setdefault("Content-Security-Policy", DOCS_CSP)
        else:
            response.headers.setdefault("Content-Security-Policy", JSON_CSP)
            response.headers.setdefault("Cache-Control", "no-store")
        return response
