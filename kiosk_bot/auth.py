"""
Authentication Module for Kiosk Bot
===================================

HTTP Basic Authentication for the admin endpoints (menu and category
maintenance). Credentials come from the environment (ADMIN_USERNAME,
ADMIN_PASSWORD) and are compared in constant time.

If ADMIN_PASSWORD is not configured, admin endpoints return 503 Service
Unavailable rather than allowing unauthenticated access.

Usage:
------
    from kiosk_bot.auth import verify_admin_credentials

    @router.post("/admin/menu/items")
    def create_item(admin: str = Depends(verify_admin_credentials)):
        ...
"""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from . import config


# Shared realm so browsers cache credentials across admin pages
security = HTTPBasic(realm="Kiosk Admin")


def verify_admin_credentials(
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    Verify HTTP Basic Auth credentials for admin endpoints.

    Returns:
        str: The authenticated username.

    Raises:
        HTTPException (503): ADMIN_PASSWORD is not set.
        HTTPException (401): Invalid credentials. Includes WWW-Authenticate
                            so the browser prompts for credentials.
    """
    if not config.ADMIN_PASSWORD:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin authentication not configured. Set ADMIN_PASSWORD environment variable.",
        )

    username_correct = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        config.ADMIN_USERNAME.encode("utf-8"),
    )
    password_correct = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        config.ADMIN_PASSWORD.encode("utf-8"),
    )

    if not (username_correct and password_correct):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username
