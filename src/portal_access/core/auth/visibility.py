"""Declarative show/hide rules for UI fragments.

A rule checks either permissions or roles (never both), each with an
any/all mode, and may additionally gate on a record status. The decision
table for authentication is:

==================  ===============  =====
anonymous_only      authenticated    shown
==================  ===============  =====
True                False            yes
True                True             no
False               False            no
False               True             evaluate rule
==================  ===============  =====
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from .claims import as_values
from .evaluator import SYSTEM_ADMINISTRATOR, PrincipalEvaluator
from .principal import PrincipalSnapshot


class MatchMode(str, enum.Enum):
    """How several permissions or roles combine."""

    ANY = "any"
    ALL = "all"


@dataclass(frozen=True)
class VisibilityRule:
    permissions: tuple[str, ...] = ()
    permission_mode: MatchMode = MatchMode.ANY
    roles: tuple[str, ...] = ()
    role_mode: MatchMode = MatchMode.ANY
    status_entity: str | None = None
    anonymous_only: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", _clean(self.permissions))
        object.__setattr__(self, "roles", _clean(self.roles))
        if self.permissions and self.roles:
            raise ValueError("Cannot specify both permissions and roles at the same time.")


def _clean(values: Iterable[str] | str) -> tuple[str, ...]:
    return tuple(value for value in as_values(values) if value and value.strip())


def _matches(mode: MatchMode, results: Iterable[bool]) -> bool:
    if mode is MatchMode.ALL:
        return all(results)
    return any(results)


def is_visible(
    evaluator: PrincipalEvaluator,
    snapshot: PrincipalSnapshot | None,
    rule: VisibilityRule,
    *,
    status: str | None = None,
) -> bool:
    """Decide whether content guarded by ``rule`` is shown.

    ``snapshot`` is ``None`` for unauthenticated callers.
    """

    if rule.anonymous_only:
        return snapshot is None
    if snapshot is None:
        return False
    if snapshot.is_in_role(SYSTEM_ADMINISTRATOR):
        return True

    if rule.permissions:
        granted = _matches(
            rule.permission_mode,
            (evaluator.has_permission(snapshot, key) for key in rule.permissions),
        )
    elif rule.roles:
        granted = _matches(rule.role_mode, (snapshot.is_in_role(role) for role in rule.roles))
    else:
        granted = True

    if not granted:
        return False
    if not rule.status_entity or status is None or not status.strip():
        return True
    return evaluator.can_access_record_status(snapshot, rule.status_entity, status)


__all__ = ["MatchMode", "VisibilityRule", "is_visible"]
