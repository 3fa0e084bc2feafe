"""Static RBAC tables: permission catalog, role maps and their configuration."""

from .config import (
    AccessConfigError,
    AccessControlConfig,
    audit_access_config,
    default_access_config,
    get_access_config,
    load_access_config,
    reload_access_config,
)
from .role_permissions import RolePermissionMap
from .role_statuses import RoleStatusMap
from .workspaces import WorkspaceRoleMatrix

__all__ = [
    "AccessConfigError",
    "AccessControlConfig",
    "RolePermissionMap",
    "RoleStatusMap",
    "WorkspaceRoleMatrix",
    "audit_access_config",
    "default_access_config",
    "get_access_config",
    "load_access_config",
    "reload_access_config",
]
