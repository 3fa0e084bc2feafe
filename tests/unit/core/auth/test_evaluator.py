"""Principal evaluator behaviour against the built-in tables."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from portal_access.core.auth.claims import ClaimSet
from portal_access.core.auth.evaluator import PrincipalEvaluator, get_evaluator
from portal_access.core.auth.principal import PrincipalSnapshot
from portal_access.core.rbac.config import get_access_config
from portal_access.core.rbac.constants import (
    DocumentStatus,
    EntityTypes,
    ModificationStatus,
    ProjectRecordStatus,
    Roles,
    UserStatus,
    Workspaces,
)
from portal_access.core.rbac.registry import PERMISSIONS, MyResearch, Sponsor

SignedIn = Callable[..., PrincipalSnapshot]

ADMIN = PrincipalSnapshot(roles=frozenset({Roles.SYSTEM_ADMINISTRATOR}))


# ---------------------------------------------------------------------------
# has_permission
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "permission",
    ["", "nonsense", "myresearch.projectrecord.create", "x.y.z", "SYSTEMADMIN"],
)
def test_admin_has_every_permission(evaluator: PrincipalEvaluator, permission: str) -> None:
    assert evaluator.has_permission(ADMIN, permission)


def test_admin_passes_with_garbled_claims(evaluator: PrincipalEvaluator) -> None:
    claims = ClaimSet.from_mapping(
        {
            "role": [Roles.SYSTEM_ADMINISTRATOR],
            "permissions": ["???", ""],
            "allowed_statuses/Modification": ["not-a-status"],
        }
    )
    snapshot = evaluator.snapshot_from_claims(claims)

    assert evaluator.has_permission(snapshot, Sponsor.MODIFICATIONS_AUTHORISE)
    assert evaluator.can_access_record_status(snapshot, EntityTypes.DOCUMENT, "Anything")
    assert evaluator.can_access_workspace(snapshot, "")


@pytest.mark.parametrize("definition", PERMISSIONS, ids=lambda definition: definition.key)
def test_no_permissions_means_no_access(evaluator: PrincipalEvaluator, definition) -> None:
    snapshot = PrincipalSnapshot(roles=frozenset({Roles.APPLICANT}))
    assert not evaluator.has_permission(snapshot, definition.key)


def test_permission_match_is_exact(evaluator: PrincipalEvaluator) -> None:
    snapshot = PrincipalSnapshot(permissions=frozenset({MyResearch.PROJECT_RECORD_READ}))

    assert evaluator.has_permission(snapshot, MyResearch.PROJECT_RECORD_READ)
    assert not evaluator.has_permission(snapshot, MyResearch.PROJECT_RECORD_READ.upper())
    assert not evaluator.has_permission(snapshot, "myresearch.projectrecord.*")
    assert not evaluator.has_permission(snapshot, "myresearch.projectrecord")


def test_has_permission_reads_snapshot_not_tables(evaluator: PrincipalEvaluator) -> None:
    # Role alone grants nothing per request; only embedded permissions count.
    snapshot = PrincipalSnapshot(roles=frozenset({Roles.APPLICANT}), permissions=frozenset())
    assert not evaluator.has_permission(snapshot, MyResearch.WORKSPACE_ACCESS)


def test_sponsor_round_trip(evaluator: PrincipalEvaluator, signed_in: SignedIn) -> None:
    snapshot = signed_in(Roles.SPONSOR)

    assert snapshot.permissions == evaluator.config.permissions.permissions_of(Roles.SPONSOR)
    assert evaluator.has_permission(snapshot, MyResearch.PROJECT_RECORD_READ)
    assert evaluator.has_permission(snapshot, Sponsor.MODIFICATIONS_AUTHORISE)
    assert not evaluator.has_permission(snapshot, MyResearch.PROJECT_RECORD_CREATE)


def test_any_and_all_permissions(evaluator: PrincipalEvaluator, signed_in: SignedIn) -> None:
    snapshot = signed_in(Roles.SPONSOR)
    keys = [MyResearch.PROJECT_RECORD_READ, MyResearch.PROJECT_RECORD_CREATE]

    assert evaluator.has_any_permission(snapshot, keys)
    assert not evaluator.has_all_permissions(snapshot, keys)
    assert not evaluator.has_any_permission(snapshot, [])
    assert evaluator.has_all_permissions(snapshot, [])


def test_denial_is_logged(
    evaluator: PrincipalEvaluator,
    signed_in: SignedIn,
    caplog: pytest.LogCaptureFixture,
) -> None:
    snapshot = signed_in(Roles.APPLICANT)

    with caplog.at_level(logging.DEBUG, logger="portal_access.core.auth.evaluator"):
        evaluator.has_permission(snapshot, Sponsor.MODIFICATIONS_AUTHORISE)

    record = next(r for r in caplog.records if r.getMessage() == "access.permission.denied")
    assert record.permission == Sponsor.MODIFICATIONS_AUTHORISE
    assert record.roles == Roles.APPLICANT
    assert record.user_id == "user-1"


# ---------------------------------------------------------------------------
# Record statuses
# ---------------------------------------------------------------------------


def test_organisation_administrator_modification_statuses(
    evaluator: PrincipalEvaluator,
    signed_in: SignedIn,
) -> None:
    snapshot = signed_in(Roles.ORGANISATION_ADMINISTRATOR)

    assert evaluator.get_allowed_statuses(snapshot, EntityTypes.MODIFICATION) == {
        ModificationStatus.AUTHORISED,
        ModificationStatus.WITH_SPONSOR,
    }
    assert evaluator.can_access_record_status(
        snapshot, EntityTypes.MODIFICATION, ModificationStatus.WITH_SPONSOR
    )
    assert not evaluator.can_access_record_status(
        snapshot, EntityTypes.MODIFICATION, ModificationStatus.IN_DRAFT
    )


def test_status_access_matches_union(evaluator: PrincipalEvaluator, signed_in: SignedIn) -> None:
    roles = (Roles.SPONSOR, Roles.STUDY_WIDE_REVIEWER)
    snapshot = signed_in(*roles)
    candidates = {
        EntityTypes.PROJECT_RECORD: vars(ProjectRecordStatus),
        EntityTypes.MODIFICATION: vars(ModificationStatus),
        EntityTypes.DOCUMENT: vars(DocumentStatus),
    }

    for entity_type, attrs in candidates.items():
        union = evaluator.config.statuses.union_allowed_statuses_of(roles, entity_type)
        statuses = [value for name, value in attrs.items() if name.isupper()]
        for status in statuses:
            assert evaluator.can_access_record_status(snapshot, entity_type, status) == (
                status in union
            )


def test_status_check_is_case_sensitive(evaluator: PrincipalEvaluator, signed_in: SignedIn) -> None:
    snapshot = signed_in(Roles.APPLICANT)

    assert evaluator.can_access_record_status(snapshot, EntityTypes.PROJECT_RECORD, "InDraft")
    assert not evaluator.can_access_record_status(snapshot, EntityTypes.PROJECT_RECORD, "indraft")
    assert not evaluator.can_access_record_status(snapshot, "projectrecord", "InDraft")


def test_unknown_role_yields_nothing(evaluator: PrincipalEvaluator, signed_in: SignedIn) -> None:
    snapshot = signed_in("Foo")

    assert evaluator.get_user_permissions(snapshot) == frozenset()
    assert evaluator.get_allowed_statuses(snapshot, EntityTypes.MODIFICATION) == frozenset()
    assert evaluator.get_allowed_statuses(snapshot, "Unknown") == frozenset()
    assert not evaluator.can_access_record_status(
        snapshot, EntityTypes.MODIFICATION, ModificationStatus.WITH_SPONSOR
    )


def test_no_roles_yields_nothing(evaluator: PrincipalEvaluator) -> None:
    snapshot = evaluator.issue_snapshot([])

    assert snapshot.permissions == frozenset()
    assert all(not values for values in snapshot.allowed_statuses.values())


def test_derived_permissions_combine_roles(
    evaluator: PrincipalEvaluator,
    signed_in: SignedIn,
) -> None:
    combined = evaluator.get_user_permissions(signed_in(Roles.APPLICANT, Roles.SPONSOR))

    assert MyResearch.PROJECT_RECORD_CREATE in combined
    assert Sponsor.MODIFICATIONS_AUTHORISE in combined


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("workspace", ["", "unknown", Workspaces.SYSTEM_ADMINISTRATION])
def test_admin_enters_any_workspace(evaluator: PrincipalEvaluator, workspace: str) -> None:
    assert evaluator.can_access_workspace(ADMIN, workspace)


def test_disabled_admin_still_bypasses(evaluator: PrincipalEvaluator) -> None:
    snapshot = PrincipalSnapshot(
        roles=frozenset({Roles.SYSTEM_ADMINISTRATOR}),
        user_status=UserStatus.DISABLED,
    )
    assert evaluator.can_access_workspace(snapshot, Workspaces.SYSTEM_ADMINISTRATION)


@pytest.mark.parametrize(
    ("role", "workspace", "expected"),
    [
        (Roles.APPLICANT, Workspaces.MY_RESEARCH, True),
        (Roles.APPLICANT, Workspaces.PROFILE, True),
        (Roles.APPLICANT, Workspaces.SPONSOR, False),
        (Roles.APPLICANT, Workspaces.APPROVALS, False),
        (Roles.SPONSOR, Workspaces.SPONSOR, True),
        (Roles.ORGANISATION_ADMINISTRATOR, Workspaces.SPONSOR, True),
        (Roles.TEAM_MANAGER, Workspaces.APPROVALS, True),
        (Roles.STUDY_WIDE_REVIEWER, Workspaces.SYSTEM_ADMINISTRATION, False),
        (Roles.WORKFLOW_COORDINATOR, "unknown", False),
    ],
)
def test_workspace_matrix(
    signed_in: SignedIn,
    evaluator: PrincipalEvaluator,
    role: str,
    workspace: str,
    expected: bool,
) -> None:
    assert evaluator.can_access_workspace(signed_in(role), workspace) is expected


def test_disabled_user_denied_everywhere(
    evaluator: PrincipalEvaluator,
    signed_in: SignedIn,
) -> None:
    snapshot = signed_in(Roles.APPLICANT, user_status=UserStatus.DISABLED)

    assert not evaluator.can_access_workspace(snapshot, Workspaces.MY_RESEARCH)
    assert not evaluator.can_access_workspace(snapshot, Workspaces.PROFILE)


# ---------------------------------------------------------------------------
# Default instance
# ---------------------------------------------------------------------------


def test_default_evaluator_is_shared() -> None:
    evaluator = get_evaluator()

    assert get_evaluator() is evaluator
    assert evaluator.config is get_access_config()
