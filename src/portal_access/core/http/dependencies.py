"""FastAPI dependencies that bridge HTTP requests to the evaluator.

The authentication layer in front of these dependencies is expected to put
either a :class:`PrincipalSnapshot` on ``request.state.principal`` or a claims
source on ``request.state.claims``. A request with neither is rejected as
unauthenticated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request

from portal_access.common.logging import log_context
from portal_access.core.auth.claims import ClaimSource
from portal_access.core.auth.errors import AuthenticationError, PermissionDeniedError
from portal_access.core.auth.evaluator import PrincipalEvaluator, get_evaluator
from portal_access.core.auth.principal import PrincipalSnapshot
from portal_access.core.auth.requirements import (
    PermissionRequirement,
    Requirement,
    WorkspaceRequirement,
    resolve_policy,
)

logger = logging.getLogger(__name__)

EvaluatorDep = Annotated[PrincipalEvaluator, Depends(get_evaluator)]

RequirementDependency = Callable[..., PrincipalSnapshot]


def get_principal_snapshot(request: Request, evaluator: EvaluatorDep) -> PrincipalSnapshot:
    """Return the snapshot for this request, building it from claims once."""

    principal = getattr(request.state, "principal", None)
    if isinstance(principal, PrincipalSnapshot):
        return principal

    claims = getattr(request.state, "claims", None)
    if isinstance(claims, ClaimSource):
        snapshot = evaluator.snapshot_from_claims(claims)
        request.state.principal = snapshot
        return snapshot

    raise AuthenticationError("Authentication required")


SnapshotDep = Annotated[PrincipalSnapshot, Depends(get_principal_snapshot)]


def require(requirement: Requirement) -> RequirementDependency:
    """Return a dependency enforcing ``requirement``."""

    def dependency(
        request: Request,
        snapshot: SnapshotDep,
        evaluator: EvaluatorDep,
    ) -> PrincipalSnapshot:
        if requirement.is_satisfied(snapshot, evaluator):
            return snapshot
        logger.info(
            "access.request.denied",
            extra=log_context(
                user_id=snapshot.user_id,
                requirement=requirement.name,
                scope_type=requirement.scope_type,
                path=request.url.path,
            ),
        )
        raise PermissionDeniedError(requirement.name, scope_type=requirement.scope_type)

    return dependency


def require_permission(permission: str) -> RequirementDependency:
    return require(PermissionRequirement(permission))


def require_workspace(workspace: str) -> RequirementDependency:
    return require(WorkspaceRequirement(workspace))


def require_policy(policy_name: str) -> RequirementDependency:
    """Resolve a ``workspace`` or ``workspace.area.action`` policy name."""

    requirement = resolve_policy(policy_name)
    if requirement is None:
        raise ValueError(
            f"Policy '{policy_name}' is neither a workspace nor a workspace.area.action name"
        )
    return require(requirement)


__all__ = [
    "EvaluatorDep",
    "SnapshotDep",
    "get_principal_snapshot",
    "require",
    "require_permission",
    "require_policy",
    "require_workspace",
]
