"""Map access-control failures onto HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..auth.errors import AuthenticationError, PermissionDeniedError


def _unauthenticated(_request: Request, exc: AuthenticationError) -> JSONResponse:
    """No principal on the request: 401."""

    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc) or "Authentication required"},
        headers={"WWW-Authenticate": "Bearer"},
    )


def _forbidden(_request: Request, exc: PermissionDeniedError) -> JSONResponse:
    """Requirement not satisfied: 403 naming the requirement and its scope."""

    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "detail": {
                "error": "forbidden",
                "requirement": exc.requirement,
                "scope_type": exc.scope_type,
            }
        },
    )


def register_access_exception_handlers(app: FastAPI) -> None:
    """Install the 401/403 handlers on ``app``."""

    app.add_exception_handler(AuthenticationError, _unauthenticated)
    app.add_exception_handler(PermissionDeniedError, _forbidden)


__all__ = ["register_access_exception_handlers"]
