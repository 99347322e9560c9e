"""
Admin key authentication for the compliance API.

Read endpoints (stats, violation listings, audit history) are open. Anything
that mutates state or triggers work (clearing the ledger, running an audit,
regenerating a summary, ingesting summaries) requires the admin key.

Usage:
    Set API_KEY in the environment:  API_KEY=your-secret-key
    Clients pass:                    Authorization: Bearer your-secret-key

Security:
    - In production (ENV=production), API_KEY is REQUIRED unless
      AUTH_DISABLED=true is set explicitly. Startup fails otherwise.
    - In development, a missing API_KEY leaves the admin endpoints open.
    - Keys are compared with hmac.compare_digest.
"""

import hashlib
import hmac
import logging
import os
from dataclasses import dataclass

from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

security_scheme = HTTPBearer(auto_error=False)


@dataclass
class AdminContext:
    """Who performed an admin action. `operator` is a key fingerprint or "anon"."""

    operator: str = "anon"
    authenticated: bool = False


def get_api_key() -> str | None:
    """Load the admin key from the environment. None means auth is off."""
    return os.environ.get("API_KEY", "").strip() or None


def _is_production() -> bool:
    env = os.environ.get("ENV", os.environ.get("ENVIRONMENT", "development"))
    return env.lower() in ("production", "prod", "staging")


def _auth_explicitly_disabled() -> bool:
    return os.environ.get("AUTH_DISABLED", "").lower() in ("true", "1", "yes")


def check_production_auth() -> None:
    """Fail startup in production when no admin key is configured."""
    if get_api_key() is not None:
        return
    if not _is_production():
        logger.info("[Auth] No API_KEY set (dev mode). Admin endpoints are open.")
        return
    if _auth_explicitly_disabled():
        logger.warning(
            "[Auth] AUTH_DISABLED=true in production. Admin endpoints are open."
        )
        return
    raise RuntimeError(
        "API_KEY is required in production mode. "
        "Set AUTH_DISABLED=true to run without it (not recommended)."
    )


async def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),
) -> AdminContext:
    """FastAPI dependency guarding admin endpoints."""
    expected_key = get_api_key()
    if expected_key is None:
        return AdminContext()

    client_host = request.client.host if request.client else "unknown"
    if credentials is None:
        logger.warning(f"[Auth] Missing admin key from {client_host}")
        raise HTTPException(status_code=401, detail="Missing API key")

    if not hmac.compare_digest(credentials.credentials, expected_key):
        logger.warning(f"[Auth] Invalid admin key from {client_host}")
        raise HTTPException(status_code=403, detail="Invalid API key")

    fingerprint = hashlib.sha256(credentials.credentials.encode()).hexdigest()[:16]
    return AdminContext(operator=fingerprint, authenticated=True)
