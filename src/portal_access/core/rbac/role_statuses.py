"""Role to allowed record-status table, configured per entity type."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from portal_access.core.rbac.constants import (
    DocumentStatus,
    EntityTypes,
    ModificationStatus,
    ProjectRecordStatus,
    Roles,
)

_REVIEW_BODY_MODIFICATION_STATUSES = (
    ModificationStatus.WITH_REVIEW_BODY,
    ModificationStatus.APPROVED,
    ModificationStatus.NOT_APPROVED,
    ModificationStatus.RECEIVED,
    ModificationStatus.REVIEW_IN_PROGRESS,
)

_REVIEW_BODY_DOCUMENT_STATUSES = (
    DocumentStatus.WITH_REVIEW_BODY,
    DocumentStatus.APPROVED,
    DocumentStatus.NOT_APPROVED,
    DocumentStatus.REVIEW_IN_PROGRESS,
    DocumentStatus.RECEIVED,
)

ROLE_STATUSES: Mapping[str, Mapping[str, tuple[str, ...]]] = {
    EntityTypes.PROJECT_RECORD: {
        Roles.APPLICANT: (ProjectRecordStatus.IN_DRAFT, ProjectRecordStatus.ACTIVE),
        Roles.SPONSOR: (ProjectRecordStatus.ACTIVE,),
        Roles.WORKFLOW_COORDINATOR: (ProjectRecordStatus.ACTIVE,),
        Roles.TEAM_MANAGER: (ProjectRecordStatus.ACTIVE,),
        Roles.STUDY_WIDE_REVIEWER: (ProjectRecordStatus.ACTIVE,),
    },
    EntityTypes.MODIFICATION: {
        Roles.APPLICANT: (
            ModificationStatus.IN_DRAFT,
            ModificationStatus.WITH_SPONSOR,
            ModificationStatus.WITH_REVIEW_BODY,
            ModificationStatus.APPROVED,
            ModificationStatus.NOT_AUTHORISED,
            ModificationStatus.NOT_APPROVED,
        ),
        Roles.SPONSOR: (
            ModificationStatus.WITH_SPONSOR,
            ModificationStatus.WITH_REVIEW_BODY,
            ModificationStatus.APPROVED,
            ModificationStatus.NOT_AUTHORISED,
            ModificationStatus.NOT_APPROVED,
        ),
        Roles.ORGANISATION_ADMINISTRATOR: (
            ModificationStatus.AUTHORISED,
            ModificationStatus.WITH_SPONSOR,
        ),
        Roles.WORKFLOW_COORDINATOR: _REVIEW_BODY_MODIFICATION_STATUSES,
        Roles.TEAM_MANAGER: _REVIEW_BODY_MODIFICATION_STATUSES,
        Roles.STUDY_WIDE_REVIEWER: _REVIEW_BODY_MODIFICATION_STATUSES,
    },
    EntityTypes.DOCUMENT: {
        Roles.APPLICANT: (
            DocumentStatus.UPLOADED,
            DocumentStatus.FAILED,
            DocumentStatus.INCOMPLETE,
            DocumentStatus.COMPLETE,
            DocumentStatus.WITH_SPONSOR,
            DocumentStatus.WITH_REVIEW_BODY,
            DocumentStatus.APPROVED,
            DocumentStatus.NOT_AUTHORISED,
            DocumentStatus.NOT_APPROVED,
        ),
        Roles.SPONSOR: (
            DocumentStatus.WITH_SPONSOR,
            DocumentStatus.WITH_REVIEW_BODY,
            DocumentStatus.APPROVED,
            DocumentStatus.NOT_AUTHORISED,
            DocumentStatus.NOT_APPROVED,
        ),
        Roles.WORKFLOW_COORDINATOR: _REVIEW_BODY_DOCUMENT_STATUSES,
        Roles.TEAM_MANAGER: _REVIEW_BODY_DOCUMENT_STATUSES,
        Roles.STUDY_WIDE_REVIEWER: _REVIEW_BODY_DOCUMENT_STATUSES,
    },
}


@dataclass(frozen=True)
class RoleStatusMap:
    """Immutable (entity type, role) -> allowed statuses lookup.

    Each pair is configured independently. A role missing for one entity type
    contributes nothing there but may still have entries elsewhere.
    """

    _table: Mapping[str, Mapping[str, frozenset[str]]] = field(
        default_factory=lambda: MappingProxyType({}),
        repr=False,
    )

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Mapping[str, Iterable[str]]],
    ) -> RoleStatusMap:
        table = {
            entity_type: MappingProxyType(
                {role: frozenset(statuses) for role, statuses in roles.items()}
            )
            for entity_type, roles in mapping.items()
        }
        return cls(MappingProxyType(table))

    @property
    def entity_types(self) -> frozenset[str]:
        return frozenset(self._table)

    def roles_for(self, entity_type: str) -> frozenset[str]:
        return frozenset(self._table.get(entity_type, {}))

    def allowed_statuses_of(self, role: str, entity_type: str) -> frozenset[str]:
        return self._table.get(entity_type, {}).get(role, frozenset())

    def union_allowed_statuses_of(
        self,
        roles: Iterable[str],
        entity_type: str,
    ) -> frozenset[str]:
        allowed: set[str] = set()
        for role in roles:
            allowed.update(self.allowed_statuses_of(role, entity_type))
        return frozenset(allowed)

    def union_allowed_statuses_by_entity(
        self,
        roles: Iterable[str],
    ) -> dict[str, frozenset[str]]:
        held = tuple(roles)
        return {
            entity_type: self.union_allowed_statuses_of(held, entity_type)
            for entity_type in self._table
        }

    def as_dict(self) -> dict[str, dict[str, list[str]]]:
        return {
            entity_type: {role: sorted(statuses) for role, statuses in roles.items()}
            for entity_type, roles in self._table.items()
        }


__all__ = ["ROLE_STATUSES", "RoleStatusMap"]
