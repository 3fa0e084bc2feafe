"""Role-permission and role-status tables."""

from __future__ import annotations

from itertools import combinations

import pytest

from portal_access.core.rbac.constants import (
    EntityTypes,
    ModificationStatus,
    ProjectRecordStatus,
    Roles,
    Workspaces,
)
from portal_access.core.rbac.registry import Approvals, MyResearch, Sponsor
from portal_access.core.rbac.role_permissions import ROLE_PERMISSIONS, RolePermissionMap
from portal_access.core.rbac.role_statuses import ROLE_STATUSES, RoleStatusMap
from portal_access.core.rbac.workspaces import WORKSPACE_ROLES, WorkspaceRoleMatrix

KNOWN_ROLES = sorted(ROLE_PERMISSIONS)


def _role_subsets() -> list[frozenset[str]]:
    pool = KNOWN_ROLES + ["Foo", Roles.SYSTEM_ADMINISTRATOR]
    return [frozenset(combo) for size in range(0, 3) for combo in combinations(pool, size)]


@pytest.fixture
def permission_map() -> RolePermissionMap:
    return RolePermissionMap.from_mapping(ROLE_PERMISSIONS)


@pytest.fixture
def status_map() -> RoleStatusMap:
    return RoleStatusMap.from_mapping(ROLE_STATUSES)


# ---------------------------------------------------------------------------
# Role-permission map
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("role", ["Foo", "", "applicant", Roles.SYSTEM_ADMINISTRATOR])
def test_unmapped_role_has_no_permissions(permission_map: RolePermissionMap, role: str) -> None:
    assert permission_map.permissions_of(role) == frozenset()
    assert permission_map.union_permissions_of({role}) == frozenset()


def test_union_of_no_roles_is_empty(permission_map: RolePermissionMap) -> None:
    assert permission_map.union_permissions_of(set()) == frozenset()


def test_union_is_a_homomorphism(permission_map: RolePermissionMap) -> None:
    subsets = _role_subsets()
    for left in subsets:
        for right in subsets:
            assert permission_map.union_permissions_of(left | right) == (
                permission_map.union_permissions_of(left)
                | permission_map.union_permissions_of(right)
            )


def test_sponsor_is_read_only_in_my_research(permission_map: RolePermissionMap) -> None:
    sponsor = permission_map.permissions_of(Roles.SPONSOR)
    assert MyResearch.PROJECT_RECORD_READ in sponsor
    assert Sponsor.MODIFICATIONS_AUTHORISE in sponsor
    assert MyResearch.PROJECT_RECORD_CREATE not in sponsor
    assert MyResearch.MODIFICATIONS_UPDATE not in sponsor


def test_union_deduplicates_shared_permissions(permission_map: RolePermissionMap) -> None:
    union = permission_map.union_permissions_of([Roles.TEAM_MANAGER, Roles.WORKFLOW_COORDINATOR])
    assert Approvals.MODIFICATIONS_ASSIGN in union
    assert Approvals.MODIFICATIONS_REASSIGN in union
    assert len(union) == len(
        permission_map.permissions_of(Roles.TEAM_MANAGER)
        | permission_map.permissions_of(Roles.WORKFLOW_COORDINATOR)
    )


def test_role_level_checks(permission_map: RolePermissionMap) -> None:
    assert permission_map.role_has_permission(Roles.APPLICANT, MyResearch.PROJECT_RECORD_CREATE)
    assert not permission_map.role_has_permission(Roles.SPONSOR, MyResearch.PROJECT_RECORD_CREATE)
    assert permission_map.any_role_has_permission(
        [Roles.SPONSOR, Roles.APPLICANT], MyResearch.PROJECT_RECORD_CREATE
    )
    assert not permission_map.any_role_has_permission([], MyResearch.PROJECT_RECORD_CREATE)


def test_map_does_not_alias_source_mapping() -> None:
    source = {"Custom": ["myresearch.workspace.access"]}
    mapping = RolePermissionMap.from_mapping(source)
    source["Custom"].append("sponsor.workspace.access")
    assert mapping.permissions_of("Custom") == frozenset({"myresearch.workspace.access"})
    assert isinstance(mapping.permissions_of("Custom"), frozenset)


# ---------------------------------------------------------------------------
# Role-status map
# ---------------------------------------------------------------------------


def test_status_lookup_is_per_entity_type(status_map: RoleStatusMap) -> None:
    assert status_map.allowed_statuses_of(Roles.APPLICANT, EntityTypes.PROJECT_RECORD) == {
        ProjectRecordStatus.IN_DRAFT,
        ProjectRecordStatus.ACTIVE,
    }
    assert ModificationStatus.IN_DRAFT in status_map.allowed_statuses_of(
        Roles.APPLICANT, EntityTypes.MODIFICATION
    )
    assert ModificationStatus.IN_DRAFT not in status_map.allowed_statuses_of(
        Roles.SPONSOR, EntityTypes.MODIFICATION
    )


def test_role_missing_for_one_entity_type_keeps_others(status_map: RoleStatusMap) -> None:
    role = Roles.ORGANISATION_ADMINISTRATOR
    assert status_map.allowed_statuses_of(role, EntityTypes.DOCUMENT) == frozenset()
    assert status_map.allowed_statuses_of(role, EntityTypes.MODIFICATION) == {
        ModificationStatus.AUTHORISED,
        ModificationStatus.WITH_SPONSOR,
    }


@pytest.mark.parametrize("entity_type", ["Unknown", "modification", ""])
def test_unknown_entity_type_yields_empty(status_map: RoleStatusMap, entity_type: str) -> None:
    assert status_map.union_allowed_statuses_of(KNOWN_ROLES, entity_type) == frozenset()


def test_status_union_is_a_homomorphism(status_map: RoleStatusMap) -> None:
    subsets = _role_subsets()
    for entity_type in status_map.entity_types:
        for left in subsets:
            for right in subsets:
                assert status_map.union_allowed_statuses_of(left | right, entity_type) == (
                    status_map.union_allowed_statuses_of(left, entity_type)
                    | status_map.union_allowed_statuses_of(right, entity_type)
                )


def test_union_by_entity_covers_every_entity_type(status_map: RoleStatusMap) -> None:
    by_entity = status_map.union_allowed_statuses_by_entity(iter([Roles.SPONSOR]))
    assert set(by_entity) == {
        EntityTypes.PROJECT_RECORD,
        EntityTypes.MODIFICATION,
        EntityTypes.DOCUMENT,
    }
    assert by_entity[EntityTypes.PROJECT_RECORD] == {ProjectRecordStatus.ACTIVE}


def test_no_roles_allow_no_statuses(status_map: RoleStatusMap) -> None:
    assert all(not values for values in status_map.union_allowed_statuses_by_entity([]).values())


# ---------------------------------------------------------------------------
# Workspace matrix
# ---------------------------------------------------------------------------


def test_workspace_matrix() -> None:
    matrix = WorkspaceRoleMatrix.from_mapping(WORKSPACE_ROLES)
    assert matrix.allows([Roles.APPLICANT], Workspaces.MY_RESEARCH)
    assert not matrix.allows([Roles.APPLICANT], Workspaces.SPONSOR)
    assert matrix.allows([Roles.ORGANISATION_ADMINISTRATOR], Workspaces.SPONSOR)
    assert not matrix.allows([Roles.TEAM_MANAGER], Workspaces.SYSTEM_ADMINISTRATION)
    assert not matrix.allows([Roles.APPLICANT], "unknownworkspace")
    assert not matrix.allows([], Workspaces.PROFILE)
