"""Claim-type conventions and a minimal claims container.

The engine only needs to ask a claims source for the values stored under one
claim type. Tokens, sessions and test fixtures all satisfy ``ClaimSource``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

ROLE_CLAIM = "role"
PERMISSIONS_CLAIM = "permissions"
ALLOWED_STATUSES_CLAIM_PREFIX = "allowed_statuses/"
USER_STATUS_CLAIM = "user_status"
USER_ID_CLAIM = "userId"


def allowed_statuses_claim(entity_type: str) -> str:
    """Claim type holding the allowed statuses for ``entity_type``."""

    return f"{ALLOWED_STATUSES_CLAIM_PREFIX}{entity_type}"


def as_values(values: Iterable[str] | str | None) -> tuple[str, ...]:
    """Normalise a claim value collection; a bare string is one value, not characters."""

    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@runtime_checkable
class ClaimSource(Protocol):
    """Anything that can list the values stored under a claim type, in order."""

    def get_values(self, claim_type: str) -> Sequence[str]: ...


@runtime_checkable
class EnumerableClaimSource(ClaimSource, Protocol):
    """A claim source that can also list the claim types it holds."""

    def claim_types(self) -> Sequence[str]: ...


@dataclass(frozen=True, slots=True)
class Claim:
    type: str
    value: str


class ClaimSet:
    """Immutable, ordered collection of claims."""

    __slots__ = ("_claims",)

    def __init__(self, claims: Iterable[Claim | tuple[str, str]] = ()) -> None:
        self._claims: tuple[Claim, ...] = tuple(
            claim if isinstance(claim, Claim) else Claim(*claim) for claim in claims
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> ClaimSet:
        """Build from a decoded token payload.

        Scalar values become one claim; list or tuple values become one claim
        per item. ``None`` values are skipped.
        """

        claims: list[Claim] = []
        for claim_type, value in payload.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                claims.extend(Claim(claim_type, str(item)) for item in value if item is not None)
            else:
                claims.append(Claim(claim_type, str(value)))
        return cls(claims)

    def get_values(self, claim_type: str) -> tuple[str, ...]:
        return tuple(claim.value for claim in self._claims if claim.type == claim_type)

    def claim_types(self) -> tuple[str, ...]:
        """Distinct claim types in first-seen order."""

        return tuple(dict.fromkeys(claim.type for claim in self._claims))

    def find_first(self, claim_type: str) -> str | None:
        for claim in self._claims:
            if claim.type == claim_type:
                return claim.value
        return None

    def to_mapping(self) -> dict[str, list[str]]:
        """Group claims by type, keeping value order."""

        grouped: dict[str, list[str]] = {}
        for claim in self._claims:
            grouped.setdefault(claim.type, []).append(claim.value)
        return grouped

    def __iter__(self) -> Iterator[Claim]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClaimSet):
            return NotImplemented
        return self._claims == other._claims

    def __hash__(self) -> int:
        return hash(self._claims)

    def __repr__(self) -> str:
        return f"ClaimSet({list(self._claims)!r})"


__all__ = [
    "ALLOWED_STATUSES_CLAIM_PREFIX",
    "Claim",
    "ClaimSet",
    "ClaimSource",
    "EnumerableClaimSource",
    "PERMISSIONS_CLAIM",
    "ROLE_CLAIM",
    "USER_ID_CLAIM",
    "USER_STATUS_CLAIM",
    "allowed_statuses_claim",
    "as_values",
]
