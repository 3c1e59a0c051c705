# product_admin/core/auth.py
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from product_admin.core.config import get_settings

# HTTP Bearer scheme:
# - auto_error=False => we raise our own 401 with a consistent message.
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AdminSession:
    """
    The signed-in admin, passed explicitly to everything that needs it.

    `access_token` is forwarded to the catalog backend so it can apply
    its own authorization.
    """

    user_id: str
    email: str | None
    role: str
    access_token: str


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def _role_from_claims(claims: dict[str, Any]) -> str:
    """
    Supabase keeps app roles in `app_metadata.role`; fall back to a
    top-level `user_role` claim for custom access-token hooks.
    """
    app_metadata = claims.get("app_metadata") or {}
    return app_metadata.get("role") or claims.get("user_role") or "user"


def get_admin_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AdminSession:
    """
    Resolve the admin session from a Supabase JWT.

    Raises:
        HTTPException(401): missing token or missing `sub`.
        HTTPException(403): authenticated but not an admin.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    claims = decode_access_token(credentials.credentials)
    sub = claims.get("sub")
    if not sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub",
        )

    role = _role_from_claims(claims)
    if role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )

    return AdminSession(
        user_id=sub,
        email=claims.get("email"),
        role=role,
        access_token=credentials.credentials,
    )
