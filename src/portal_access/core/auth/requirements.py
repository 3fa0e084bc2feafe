"""Requirement objects handed to the hosting authorization pipeline.

Policy names take one of two shapes:

* ``workspace`` (no dots) resolves to a :class:`WorkspaceRequirement`;
* ``workspace.area.action`` (three segments) resolves to a
  :class:`PermissionRequirement`.

Any other name is left for the host's own policies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .evaluator import SYSTEM_ADMINISTRATOR, PrincipalEvaluator
from .principal import PrincipalSnapshot


class Requirement(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def scope_type(self) -> str: ...

    def is_satisfied(self, snapshot: PrincipalSnapshot, evaluator: PrincipalEvaluator) -> bool: ...


@dataclass(frozen=True, slots=True)
class PermissionRequirement:
    """Requires one permission; the permission key is its only state."""

    permission: str

    @property
    def name(self) -> str:
        return self.permission

    @property
    def scope_type(self) -> str:
        return "permission"

    def is_satisfied(self, snapshot: PrincipalSnapshot, evaluator: PrincipalEvaluator) -> bool:
        if snapshot.is_in_role(SYSTEM_ADMINISTRATOR):
            return True
        return evaluator.has_permission(snapshot, self.permission)


@dataclass(frozen=True, slots=True)
class WorkspaceRequirement:
    """Requires entry to a workspace via the workspace-role matrix."""

    workspace: str

    @property
    def name(self) -> str:
        return self.workspace

    @property
    def scope_type(self) -> str:
        return "workspace"

    def is_satisfied(self, snapshot: PrincipalSnapshot, evaluator: PrincipalEvaluator) -> bool:
        return evaluator.can_access_workspace(snapshot, self.workspace)


def resolve_policy(policy_name: str) -> Requirement | None:
    segments = policy_name.split(".")
    if len(segments) == 1:
        return WorkspaceRequirement(policy_name)
    if len(segments) == 3:
        return PermissionRequirement(policy_name)
    return None


__all__ = [
    "PermissionRequirement",
    "Requirement",
    "WorkspaceRequirement",
    "resolve_policy",
]
