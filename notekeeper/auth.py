"""
NoteKeeper Backend: Caller Identity
===================================

What:  Resolves the caller's user id from the request credential.
Why:   Protected note operations need an identity to set `owner` on create
       and to compare against `owner` on update/delete.
How:   FastAPI dependency. Tokens are issued and signed by the external auth
       service; here they are only verified with python-jose.

Credential lookup order:
    1. Authorization: Bearer <token>
    2. auth-token: <token>   (header sent by older clients)

Identity claim:
    `sub`, falling back to the nested `user.id` claim older tokens carry.

Pluggability:
    Routes depend on `get_current_user`. Another credential scheme is
    swapped in with `app.dependency_overrides[get_current_user] = ...`.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from notekeeper.config import settings
from notekeeper.exceptions import AuthError

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Verifies signature and expiry, returns the claims.

    Raises:
        AuthError: No secret configured, or the token is invalid/expired
    """
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not set; rejecting all bearer tokens")
        raise AuthError(context={"reason": "secret_not_configured"})
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthError(
            message="Invalid or expired token",
            context={"reason": type(e).__name__},
        )


def identity_from_claims(claims: Dict[str, Any]) -> Optional[str]:
    sub = claims.get("sub")
    if sub:
        return str(sub)
    user = claims.get("user")
    if isinstance(user, dict) and user.get("id"):
        return str(user["id"])
    return None


def resolve_identity(token: Optional[str]) -> str:
    """
    Turns a raw credential into a user id, or rejects it.

    Raises:
        AuthError: Missing credential, bad token, or token without identity
    """
    if not token:
        raise AuthError(message="Missing credentials")
    user_id = identity_from_claims(decode_token(token))
    if not user_id:
        raise AuthError(message="Invalid token", context={"reason": "no_identity_claim"})
    return user_id


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    auth_token: Optional[str] = Header(default=None, alias="auth-token"),
) -> str:
    """FastAPI dependency returning the authenticated caller's user id."""
    token = None
    if creds is not None and creds.scheme.lower() == "bearer":
        token = creds.credentials
    elif auth_token:
        token = auth_token

    try:
        return resolve_identity(token)
    except AuthError as e:
        logger.info("Rejected request: %s", e.message)
        raise
