"""Which roles may enter which workspace."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from portal_access.core.rbac.constants import Roles, Workspaces

_ALL_PORTAL_ROLES = (
    Roles.APPLICANT,
    Roles.SPONSOR,
    Roles.WORKFLOW_COORDINATOR,
    Roles.TEAM_MANAGER,
    Roles.SYSTEM_ADMINISTRATOR,
    Roles.STUDY_WIDE_REVIEWER,
    Roles.ORGANISATION_ADMINISTRATOR,
)

WORKSPACE_ROLES: Mapping[str, tuple[str, ...]] = {
    Workspaces.PROFILE: _ALL_PORTAL_ROLES,
    Workspaces.MY_RESEARCH: _ALL_PORTAL_ROLES,
    Workspaces.SPONSOR: (
        Roles.SPONSOR,
        Roles.SYSTEM_ADMINISTRATOR,
        Roles.ORGANISATION_ADMINISTRATOR,
    ),
    Workspaces.SYSTEM_ADMINISTRATION: (Roles.SYSTEM_ADMINISTRATOR,),
    Workspaces.APPROVALS: (
        Roles.TEAM_MANAGER,
        Roles.STUDY_WIDE_REVIEWER,
        Roles.WORKFLOW_COORDINATOR,
        Roles.SYSTEM_ADMINISTRATOR,
    ),
}


@dataclass(frozen=True)
class WorkspaceRoleMatrix:
    """Immutable workspace -> allowed roles lookup; unknown workspaces allow nobody."""

    _table: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({}),
        repr=False,
    )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> WorkspaceRoleMatrix:
        table = {workspace: frozenset(roles) for workspace, roles in mapping.items()}
        return cls(MappingProxyType(table))

    @property
    def workspaces(self) -> frozenset[str]:
        return frozenset(self._table)

    def allowed_roles(self, workspace: str) -> frozenset[str]:
        return self._table.get(workspace, frozenset())

    def allows(self, roles: Iterable[str], workspace: str) -> bool:
        allowed = self.allowed_roles(workspace)
        return any(role in allowed for role in roles)

    def as_dict(self) -> dict[str, list[str]]:
        return {workspace: sorted(roles) for workspace, roles in self._table.items()}


__all__ = ["WORKSPACE_ROLES", "WorkspaceRoleMatrix"]
