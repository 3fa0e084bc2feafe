"""FastAPI bindings for the access-control requirements."""

from .dependencies import (
    get_principal_snapshot,
    require,
    require_permission,
    require_policy,
    require_workspace,
)
from .errors import register_access_exception_handlers

__all__ = [
    "get_principal_snapshot",
    "register_access_exception_handlers",
    "require",
    "require_permission",
    "require_policy",
    "require_workspace",
]
