"""Per-request identity snapshot consumed by the evaluator."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .claims import (
    ALLOWED_STATUSES_CLAIM_PREFIX,
    PERMISSIONS_CLAIM,
    ROLE_CLAIM,
    USER_ID_CLAIM,
    USER_STATUS_CLAIM,
    Claim,
    ClaimSet,
    ClaimSource,
    EnumerableClaimSource,
    allowed_statuses_claim,
    as_values,
)


def _empty_statuses() -> Mapping[str, frozenset[str]]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class PrincipalSnapshot:
    """Roles plus the permission and status claims embedded at sign-in.

    Inputs are copied into immutable containers on construction, so callers
    may pass plain sets, lists or dicts. A bare string counts as one value.
    """

    roles: frozenset[str] = frozenset()
    permissions: frozenset[str] = frozenset()
    allowed_statuses: Mapping[str, frozenset[str]] = field(default_factory=_empty_statuses)
    user_id: str | None = None
    user_status: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "roles", frozenset(as_values(self.roles)))
        object.__setattr__(self, "permissions", frozenset(as_values(self.permissions)))
        statuses = {
            entity_type: frozenset(as_values(values))
            for entity_type, values in (self.allowed_statuses or {}).items()
        }
        object.__setattr__(self, "allowed_statuses", MappingProxyType(statuses))

    @classmethod
    def from_claims(
        cls,
        source: ClaimSource,
        *,
        entity_types: Iterable[str],
    ) -> PrincipalSnapshot:
        """Read roles, permissions and per-entity statuses from ``source``.

        Statuses are read for every entity type in ``entity_types``. When the
        source can list its claim types, every ``allowed_statuses/*`` claim is
        read as well, so entity types missing from the tables still resolve.
        Missing claim types simply produce empty sets.
        """

        def values(claim_type: str) -> tuple[str, ...]:
            return as_values(source.get_values(claim_type))

        wanted = set(entity_types)
        if isinstance(source, EnumerableClaimSource):
            wanted.update(
                claim_type[len(ALLOWED_STATUSES_CLAIM_PREFIX) :]
                for claim_type in source.claim_types()
                if claim_type.startswith(ALLOWED_STATUSES_CLAIM_PREFIX)
            )

        user_ids = values(USER_ID_CLAIM)
        user_statuses = values(USER_STATUS_CLAIM)
        return cls(
            roles=frozenset(values(ROLE_CLAIM)),
            permissions=frozenset(values(PERMISSIONS_CLAIM)),
            allowed_statuses={
                entity_type: frozenset(values(allowed_statuses_claim(entity_type)))
                for entity_type in wanted
            },
            user_id=user_ids[0] if user_ids else None,
            user_status=user_statuses[0] if user_statuses else None,
        )

    def is_in_role(self, role: str) -> bool:
        return role in self.roles

    def statuses_for(self, entity_type: str) -> frozenset[str]:
        return self.allowed_statuses.get(entity_type, frozenset())

    def to_claims(self) -> ClaimSet:
        """Render the snapshot using the canonical claim conventions.

        Values are sorted so the same snapshot always yields the same claims.
        """

        claims: list[Claim] = []
        if self.user_id is not None:
            claims.append(Claim(USER_ID_CLAIM, self.user_id))
        if self.user_status is not None:
            claims.append(Claim(USER_STATUS_CLAIM, self.user_status))
        claims.extend(Claim(ROLE_CLAIM, role) for role in sorted(self.roles))
        claims.extend(Claim(PERMISSIONS_CLAIM, key) for key in sorted(self.permissions))
        for entity_type in sorted(self.allowed_statuses):
            claim_type = allowed_statuses_claim(entity_type)
            claims.extend(
                Claim(claim_type, status) for status in sorted(self.allowed_statuses[entity_type])
            )
        return ClaimSet(claims)


__all__ = ["PrincipalSnapshot"]
