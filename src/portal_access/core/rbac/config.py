"""Immutable bundle of the mapping tables the evaluator reads.

The tables are built once at process start, either from the defaults shipped
with the package or from a JSON document named by
``PORTAL_ACCESS_CONFIG_FILE``, and never change afterwards.

A JSON override has this shape::

    {
      "role_permissions": {"Applicant": ["myresearch.workspace.access"]},
      "role_statuses": {"Modification": {"Applicant": ["InDraft"]}},
      "workspace_roles": {"myresearch": ["Applicant"]}
    }

Sections that are omitted fall back to the built-in tables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from portal_access.common.logging import log_context
from portal_access.core.rbac.constants import Roles
from portal_access.core.rbac.registry import PERMISSION_REGISTRY
from portal_access.core.rbac.role_permissions import ROLE_PERMISSIONS, RolePermissionMap
from portal_access.core.rbac.role_statuses import ROLE_STATUSES, RoleStatusMap
from portal_access.core.rbac.workspaces import WORKSPACE_ROLES, WorkspaceRoleMatrix
from portal_access.settings import get_settings

logger = logging.getLogger(__name__)


class AccessConfigError(ValueError):
    """Raised when a mapping document cannot be loaded."""


@dataclass(frozen=True)
class AccessControlConfig:
    """The three lookup tables, shared by reference into every evaluator."""

    permissions: RolePermissionMap = field(default_factory=RolePermissionMap)
    statuses: RoleStatusMap = field(default_factory=RoleStatusMap)
    workspaces: WorkspaceRoleMatrix = field(default_factory=WorkspaceRoleMatrix)

    @property
    def entity_types(self) -> frozenset[str]:
        return self.statuses.entity_types


class AccessConfigDocument(BaseModel):
    """Schema of the JSON override document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    role_permissions: dict[str, list[str]] | None = None
    role_statuses: dict[str, dict[str, list[str]]] | None = None
    workspace_roles: dict[str, list[str]] | None = None

    @field_validator("role_permissions")
    @classmethod
    def _permissions_registered(
        cls,
        value: dict[str, list[str]] | None,
    ) -> dict[str, list[str]] | None:
        if value is None:
            return value
        unknown = sorted(
            {key for keys in value.values() for key in keys if key not in PERMISSION_REGISTRY}
        )
        if unknown:
            raise ValueError("unregistered permission(s): " + ", ".join(unknown))
        return value

    def to_config(self) -> AccessControlConfig:
        return AccessControlConfig(
            permissions=RolePermissionMap.from_mapping(
                ROLE_PERMISSIONS if self.role_permissions is None else self.role_permissions
            ),
            statuses=RoleStatusMap.from_mapping(
                ROLE_STATUSES if self.role_statuses is None else self.role_statuses
            ),
            workspaces=WorkspaceRoleMatrix.from_mapping(
                WORKSPACE_ROLES if self.workspace_roles is None else self.workspace_roles
            ),
        )


def default_access_config() -> AccessControlConfig:
    return AccessControlConfig(
        permissions=RolePermissionMap.from_mapping(ROLE_PERMISSIONS),
        statuses=RoleStatusMap.from_mapping(ROLE_STATUSES),
        workspaces=WorkspaceRoleMatrix.from_mapping(WORKSPACE_ROLES),
    )


def load_access_config(path: Path) -> AccessControlConfig:
    """Parse and validate a JSON mapping document."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AccessConfigError(f"Unable to read access config {path}: {exc}") from exc
    try:
        document = AccessConfigDocument.model_validate_json(raw)
    except ValidationError as exc:
        raise AccessConfigError(f"Invalid access config {path}: {exc}") from exc
    return document.to_config()


def audit_access_config(config: AccessControlConfig) -> list[str]:
    """Return findings that usually indicate a typo in the tables.

    Unmapped roles and entity types still resolve to "no access" at query
    time; this only reports them.
    """

    findings: list[str] = []
    permission_roles = config.permissions.roles

    if Roles.SYSTEM_ADMINISTRATOR in permission_roles:
        findings.append(
            f"{Roles.SYSTEM_ADMINISTRATOR} is listed in role_permissions but always bypasses checks"
        )

    for entity_type in sorted(config.statuses.entity_types):
        roles = config.statuses.roles_for(entity_type)
        if not roles:
            findings.append(f"entity type '{entity_type}' has no roles configured")
        if Roles.SYSTEM_ADMINISTRATOR in roles:
            findings.append(
                f"{Roles.SYSTEM_ADMINISTRATOR} is listed in role_statuses['{entity_type}'] "
                "but always bypasses checks"
            )
        for role in sorted(roles - permission_roles - {Roles.SYSTEM_ADMINISTRATOR}):
            findings.append(
                f"role '{role}' has statuses for '{entity_type}' but no permissions"
            )

    for workspace in sorted(config.workspaces.workspaces):
        roles = config.workspaces.allowed_roles(workspace)
        for role in sorted(roles - permission_roles - {Roles.SYSTEM_ADMINISTRATOR}):
            findings.append(f"role '{role}' may enter workspace '{workspace}' but has no permissions")

    return findings


@lru_cache(maxsize=1)
def _build_access_config() -> AccessControlConfig:
    settings = get_settings()
    if settings.config_file is None:
        config = default_access_config()
        source = "builtin"
    else:
        config = load_access_config(settings.config_file)
        source = str(settings.config_file)

    logger.info(
        "access.config.loaded",
        extra=log_context(
            app=settings.app_name,
            source=source,
            role_count=len(config.permissions.roles),
            entity_types=",".join(sorted(config.entity_types)) or "-",
        ),
    )
    for finding in audit_access_config(config):
        logger.warning("access.config.audit", extra=log_context(finding=finding))
    return config


def get_access_config() -> AccessControlConfig:
    return _build_access_config()


def reload_access_config() -> AccessControlConfig:
    _build_access_config.cache_clear()
    return _build_access_config()


__all__ = [
    "AccessConfigDocument",
    "AccessConfigError",
    "AccessControlConfig",
    "audit_access_config",
    "default_access_config",
    "get_access_config",
    "load_access_config",
    "reload_access_config",
]
