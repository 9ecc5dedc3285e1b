"""
Security middleware for setting RLS context and adding security headers.
"""

import logging
from typing import Callable

from fastapi import Request, Response
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.
    """

    def __init__(self, app, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or []

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if request.url.path in self.exclude_paths:
            return response

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Clinical data must never be cached by intermediaries
        response.headers["Cache-Control"] = "no-store"

        return response


def set_rls_context(db: Session, user_id: int) -> None:
    """
    Set the RLS context for a database session.

    Postgres policies read ``app.current_user_id`` to filter rows per
    professional. Other dialects have no RLS and are left untouched.

    Args:
        db: SQLAlchemy database session
        user_id: ID of the authenticated user
    """
    if db.get_bind().dialect.name != "postgresql":
        return

    try:
        db.execute(
            text("SELECT set_config('app.current_user_id', :user_id, false)"),
            {"user_id": str(user_id)},
        )
        logger.debug(f"RLS context set for user_id={user_id}")
    except Exception as e:
        logger.error(f"Failed to set RLS context for user_id={user_id}: {e}")
        raise
