"""Bearer token verification with dual-mode support (managed auth service + mock HS256)."""

import time

import httpx
from jose import JWTError, jwt

from storefront.core.config import settings
from storefront.core.exceptions import BackendUnavailableError

AUTH_TIMEOUT = 10.0


async def decode_access_token(token: str) -> dict:
    """Verify an access token. Returns the claims dict (``sub``, ``email``, ...)."""
    if settings.AUTH_MOCK:
        return _decode_mock_token(token)
    return await _verify_with_auth_service(token)


async def _verify_with_auth_service(token: str) -> dict:
    """Ask the managed auth service who owns the token.

    The service answers ``GET /auth/v1/user`` with the user record, or a 4xx
    when the token is invalid or expired.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
        raise BackendUnavailableError(
            "Auth backend not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY, "
            "or enable AUTH_MOCK for local development."
        )

    url = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/user"
    headers = {
        "Authorization": f"Bearer {token}",
        "apikey": settings.SUPABASE_ANON_KEY,
    }
    try:
        async with httpx.AsyncClient(timeout=AUTH_TIMEOUT) as client:
            resp = await client.get(url, headers=headers)
    except httpx.HTTPError as exc:
        raise BackendUnavailableError(f"Auth backend unreachable: {exc}") from exc

    if resp.status_code >= 500:
        raise BackendUnavailableError(f"Auth backend returned {resp.status_code}")
    if resp.status_code != 200:
        raise JWTError("Invalid or expired token")

    user = resp.json()
    if not user.get("id"):
        raise JWTError("Token is not bound to a user")

    return {
        "sub": user["id"],
        "email": user.get("email"),
        "name": (user.get("user_metadata") or {}).get("full_name"),
        "app_metadata": user.get("app_metadata") or {},
    }


def _decode_mock_token(token: str) -> dict:
    """Decode a mock JWT signed with SECRET_KEY (for local dev/testing)."""
    claims = jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=["HS256"],
        options={"verify_aud": False, "verify_iss": False},
    )
    return claims


def create_mock_access_token(
    sub: str,
    email: str = "test@example.com",
    role: str | None = None,
    expires_in: int = 900,
) -> str:
    """Create a mock JWT for testing. Only usable when AUTH_MOCK=true."""
    payload = {
        "sub": sub,
        "email": email,
        "aud": "authenticated",
        "iat": int(time.time()),
        "exp": int(time.time()) + expires_in,
    }
    if role is not None:
        payload["app_metadata"] = {"role": role}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
