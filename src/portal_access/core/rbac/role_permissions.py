"""Role to permission table.

Permissions are additive: a role never removes what another role grants, so
resolving several roles is a plain set union. ``SystemAdministrator`` is not
listed here; it bypasses permission checks entirely.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from portal_access.core.rbac.constants import Roles
from portal_access.core.rbac.registry import Approvals, MyResearch, Sponsor

ROLE_PERMISSIONS: Mapping[str, tuple[str, ...]] = {
    Roles.APPLICANT: (
        MyResearch.WORKSPACE_ACCESS,
        MyResearch.PROJECT_RECORD_READ,
        MyResearch.PROJECT_RECORD_CREATE,
        MyResearch.PROJECT_RECORD_UPDATE,
        MyResearch.PROJECT_RECORD_DELETE,
        MyResearch.PROJECT_RECORD_SEARCH,
        MyResearch.PROJECT_RECORD_HISTORY_READ,
        MyResearch.PROJECT_DOCUMENTS_READ,
        MyResearch.PROJECT_DOCUMENTS_UPLOAD,
        MyResearch.PROJECT_DOCUMENTS_UPDATE,
        MyResearch.PROJECT_DOCUMENTS_DOWNLOAD,
        MyResearch.PROJECT_DOCUMENTS_DELETE,
        MyResearch.MODIFICATIONS_CREATE,
        MyResearch.MODIFICATIONS_READ,
        MyResearch.MODIFICATIONS_UPDATE,
        MyResearch.MODIFICATIONS_DELETE,
        MyResearch.MODIFICATIONS_REVIEW,
        MyResearch.MODIFICATIONS_SEARCH,
        MyResearch.MODIFICATIONS_HISTORY_READ,
    ),
    # Sponsor workspace plus read-only My Research.
    Roles.SPONSOR: (
        Sponsor.WORKSPACE_ACCESS,
        MyResearch.PROJECT_RECORD_READ,
        MyResearch.PROJECT_RECORD_HISTORY_READ,
        MyResearch.PROJECT_DOCUMENTS_READ,
        MyResearch.PROJECT_DOCUMENTS_DOWNLOAD,
        MyResearch.MODIFICATIONS_READ,
        MyResearch.MODIFICATIONS_HISTORY_READ,
        Sponsor.MODIFICATIONS_REVIEW,
        Sponsor.MODIFICATIONS_AUTHORISE,
        Sponsor.MODIFICATIONS_SEARCH,
    ),
    Roles.ORGANISATION_ADMINISTRATOR: (
        Sponsor.WORKSPACE_ACCESS,
        Sponsor.MODIFICATIONS_SEARCH,
        Sponsor.MODIFICATIONS_REVIEW,
    ),
    Roles.WORKFLOW_COORDINATOR: (
        Approvals.WORKSPACE_ACCESS,
        MyResearch.PROJECT_RECORD_READ,
        MyResearch.PROJECT_RECORD_HISTORY_READ,
        Approvals.PROJECT_RECORDS_SEARCH,
        Approvals.MODIFICATION_RECORDS_SEARCH,
        Approvals.MODIFICATIONS_ASSIGN,
        Approvals.MODIFICATIONS_APPROVE,
        Approvals.MODIFICATIONS_REVIEW,
    ),
    Roles.TEAM_MANAGER: (
        Approvals.WORKSPACE_ACCESS,
        MyResearch.PROJECT_RECORD_READ,
        MyResearch.PROJECT_RECORD_HISTORY_READ,
        Approvals.PROJECT_RECORDS_SEARCH,
        Approvals.MODIFICATION_RECORDS_SEARCH,
        Approvals.MODIFICATIONS_REASSIGN,
        Approvals.MODIFICATIONS_APPROVE,
        Approvals.MODIFICATIONS_REVIEW,
    ),
    Roles.STUDY_WIDE_REVIEWER: (
        Approvals.WORKSPACE_ACCESS,
        MyResearch.PROJECT_RECORD_READ,
        MyResearch.PROJECT_RECORD_HISTORY_READ,
        Approvals.PROJECT_RECORDS_SEARCH,
        Approvals.MODIFICATION_RECORDS_SEARCH,
        Approvals.MODIFICATIONS_APPROVE,
        Approvals.MODIFICATIONS_REVIEW,
        Approvals.MODIFICATIONS_UPDATE,
    ),
}


@dataclass(frozen=True)
class RolePermissionMap:
    """Immutable role -> permissions lookup.

    Unknown roles contribute nothing; lookups never raise.
    """

    _table: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({}),
        repr=False,
    )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> RolePermissionMap:
        table = {role: frozenset(permissions) for role, permissions in mapping.items()}
        return cls(MappingProxyType(table))

    @property
    def roles(self) -> frozenset[str]:
        return frozenset(self._table)

    def permissions_of(self, role: str) -> frozenset[str]:
        return self._table.get(role, frozenset())

    def union_permissions_of(self, roles: Iterable[str]) -> frozenset[str]:
        granted: set[str] = set()
        for role in roles:
            granted.update(self.permissions_of(role))
        return frozenset(granted)

    def role_has_permission(self, role: str, permission: str) -> bool:
        return permission in self.permissions_of(role)

    def any_role_has_permission(self, roles: Iterable[str], permission: str) -> bool:
        return any(self.role_has_permission(role, permission) for role in roles)

    def as_dict(self) -> dict[str, list[str]]:
        return {role: sorted(permissions) for role, permissions in self._table.items()}


__all__ = ["ROLE_PERMISSIONS", "RolePermissionMap"]
