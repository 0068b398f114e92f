"""Bearer tokens carrying the search principal.

Claims: sub (subject id), tenant_id, permissions (list of <object>:<action>
codes) and org (True when the caller acts in an organization space).
Signed with SECRET_KEY using ALGORITHM (HS256 by default).
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from objectsearch.core.config import get_settings
from objectsearch.shared.context import Principal

DEFAULT_TOKEN_TTL = timedelta(minutes=30)


def create_access_token(
    principal: Principal,
    expires_delta: timedelta | None = None,
) -> str:
    """Encode principal as a signed token expiring after expires_delta (30 minutes by default)."""
    settings = get_settings()
    claims: dict[str, Any] = {
        "sub": principal.subject_id,
        "permissions": sorted(principal.permissions),
        "org": principal.is_organization,
        "exp": datetime.now(UTC) + (expires_delta or DEFAULT_TOKEN_TTL),
    }
    if principal.tenant_id is not None:
        claims["tenant_id"] = principal.tenant_id
    encoded = jwt.encode(
        claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Check signature and expiry of token and return its claims.

    Raises:
        ValueError: the token is malformed, badly signed, expired, or lacks exp or sub.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e


def principal_from_claims(claims: dict[str, Any]) -> Principal:
    """Build the request Principal from verified claims.

    Raises:
        ValueError: permissions is not a list.
    """
    permissions = claims.get("permissions") or []
    if not isinstance(permissions, list):
        raise ValueError("Claim 'permissions' must be a list")
    return Principal(
        subject_id=str(claims["sub"]),
        tenant_id=claims.get("tenant_id"),
        permissions=frozenset(str(p) for p in permissions),
        is_organization=bool(claims.get("org", False)),
    )


def decode_principal(token: str) -> Principal:
    """Verify token and return the principal it carries."""
    return principal_from_claims(verify_token(token))
