"""Answer access questions for a principal snapshot.

Per-request checks (``has_permission``, ``can_access_record_status``) read the
sets embedded in the snapshot at sign-in and never walk the role tables. The
derivation methods (``get_user_permissions``, ``get_allowed_statuses`` and
``issue_snapshot``) walk the tables and are meant for claims issuance only.

Every "don't know" outcome is a denial: missing claims, unknown roles, unknown
entity types and unrecognised permission strings all evaluate to ``False``.
``SystemAdministrator`` is checked first and always allowed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache

from portal_access.common.logging import log_context
from portal_access.core.rbac.config import AccessControlConfig, get_access_config
from portal_access.core.rbac.constants import Roles, UserStatus

from .claims import ClaimSet, ClaimSource, as_values
from .principal import PrincipalSnapshot

logger = logging.getLogger(__name__)

SYSTEM_ADMINISTRATOR = Roles.SYSTEM_ADMINISTRATOR


class PrincipalEvaluator:
    """Stateless evaluation of snapshots against one immutable config."""

    __slots__ = ("_config",)

    def __init__(self, config: AccessControlConfig) -> None:
        self._config = config

    @property
    def config(self) -> AccessControlConfig:
        return self._config

    # ------------------------------------------------------------------
    # Per-request checks
    # ------------------------------------------------------------------

    def has_permission(self, snapshot: PrincipalSnapshot, permission: str) -> bool:
        if snapshot.is_in_role(SYSTEM_ADMINISTRATOR):
            return True
        if permission in snapshot.permissions:
            return True
        logger.debug(
            "access.permission.denied",
            extra=log_context(
                user_id=snapshot.user_id,
                roles=snapshot.roles,
                permission=permission,
            ),
        )
        return False

    def has_any_permission(
        self,
        snapshot: PrincipalSnapshot,
        permissions: Iterable[str],
    ) -> bool:
        return any(self.has_permission(snapshot, permission) for permission in permissions)

    def has_all_permissions(
        self,
        snapshot: PrincipalSnapshot,
        permissions: Iterable[str],
    ) -> bool:
        return all(self.has_permission(snapshot, permission) for permission in permissions)

    def can_access_record_status(
        self,
        snapshot: PrincipalSnapshot,
        entity_type: str,
        status: str,
    ) -> bool:
        if snapshot.is_in_role(SYSTEM_ADMINISTRATOR):
            return True
        if status in snapshot.statuses_for(entity_type):
            return True
        logger.debug(
            "access.status.denied",
            extra=log_context(
                user_id=snapshot.user_id,
                roles=snapshot.roles,
                entity_type=entity_type,
                status=status,
            ),
        )
        return False

    def can_access_workspace(self, snapshot: PrincipalSnapshot, workspace: str) -> bool:
        if snapshot.is_in_role(SYSTEM_ADMINISTRATOR):
            return True
        if snapshot.user_status == UserStatus.DISABLED:
            logger.debug(
                "access.workspace.disabled_user",
                extra=log_context(user_id=snapshot.user_id, workspace=workspace),
            )
            return False
        if self._config.workspaces.allows(snapshot.roles, workspace):
            return True
        logger.debug(
            "access.workspace.denied",
            extra=log_context(
                user_id=snapshot.user_id,
                roles=snapshot.roles,
                workspace=workspace,
            ),
        )
        return False

    # ------------------------------------------------------------------
    # Claims issuance
    # ------------------------------------------------------------------

    def get_user_permissions(self, snapshot: PrincipalSnapshot) -> frozenset[str]:
        return self._config.permissions.union_permissions_of(snapshot.roles)

    def get_allowed_statuses(
        self,
        snapshot: PrincipalSnapshot,
        entity_type: str,
    ) -> frozenset[str]:
        return self._config.statuses.union_allowed_statuses_of(snapshot.roles, entity_type)

    def get_all_allowed_statuses(self, snapshot: PrincipalSnapshot) -> dict[str, frozenset[str]]:
        return self._config.statuses.union_allowed_statuses_by_entity(snapshot.roles)

    def issue_snapshot(
        self,
        roles: Iterable[str] | str,
        *,
        user_id: str | None = None,
        user_status: str | None = None,
    ) -> PrincipalSnapshot:
        """Build the snapshot a sign-in would produce for ``roles``.

        A single role may be passed as a bare string.
        """

        bare = PrincipalSnapshot(
            roles=frozenset(as_values(roles)),
            user_id=user_id,
            user_status=user_status,
        )
        return PrincipalSnapshot(
            roles=bare.roles,
            permissions=self.get_user_permissions(bare),
            allowed_statuses=self.get_all_allowed_statuses(bare),
            user_id=user_id,
            user_status=user_status,
        )

    def issue_claims(
        self,
        roles: Iterable[str] | str,
        *,
        user_id: str | None = None,
        user_status: str | None = None,
    ) -> ClaimSet:
        return self.issue_snapshot(roles, user_id=user_id, user_status=user_status).to_claims()

    def snapshot_from_claims(self, source: ClaimSource) -> PrincipalSnapshot:
        return PrincipalSnapshot.from_claims(source, entity_types=self._config.entity_types)


@lru_cache(maxsize=1)
def _build_evaluator() -> PrincipalEvaluator:
    return PrincipalEvaluator(get_access_config())


def get_evaluator() -> PrincipalEvaluator:
    return _build_evaluator()


def reset_evaluator() -> None:
    _build_evaluator.cache_clear()


__all__ = [
    "PrincipalEvaluator",
    "SYSTEM_ADMINISTRATOR",
    "get_evaluator",
    "reset_evaluator",
]
