"""FastAPI dependency chain: bearer token → claims → User (store owner)."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.security import decode_access_token
from storefront.db.session import async_session_factory
from storefront.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)

ROLE_HIERARCHY = {"admin": 3, "seller": 2, "customer": 1}


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session. Commits on success, rolls back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_user_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Extract and verify the Bearer token, returning its claims."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    try:
        claims = await decode_access_token(credentials.credentials)
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}") from e

    return claims


async def get_current_user(
    claims: dict = Depends(get_current_user_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the token ``sub`` to a User row.

    Auto-provisions the user if they exist in the auth service but not yet in our DB.
    """
    auth_sub = claims.get("sub")
    if not auth_sub:
        raise HTTPException(status_code=401, detail="Token missing sub claim")

    result = await db.execute(select(User).where(User.auth_sub == auth_sub))
    user = result.scalar_one_or_none()

    if user is None:
        # Auto-provision: create user from token claims
        email = claims.get("email") or f"{auth_sub}@placeholder.local"
        full_name = claims.get("name") or email
        role = (claims.get("app_metadata") or {}).get("role")
        user = User(
            auth_sub=auth_sub,
            email=email,
            full_name=full_name,
            role=role if role in ROLE_HIERARCHY else "seller",
        )
        db.add(user)
        await db.flush()

    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is deactivated")

    return user


def require_role(min_role: str, user: User) -> None:
    """Check the user has at least min_role. Call from route handlers."""
    if ROLE_HIERARCHY.get(user.role, 0) < ROLE_HIERARCHY.get(min_role, 0):
        raise HTTPException(status_code=403, detail=f"Requires {min_role} role or higher")
