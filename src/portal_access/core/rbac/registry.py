"""Canonical permission catalog.

Every permission the portal recognises is declared here as a
``workspace.area.action`` key. The namespace classes group keys by workspace
for readability only; the catalog itself is the flat ``PERMISSIONS`` tuple.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from portal_access.core.rbac.types import PermissionDef


class MyResearch:
    WORKSPACE_ACCESS = "myresearch.workspace.access"
    PROJECT_RECORD_CREATE = "myresearch.projectrecord.create"
    PROJECT_RECORD_READ = "myresearch.projectrecord.read"
    PROJECT_RECORD_UPDATE = "myresearch.projectrecord.update"
    PROJECT_RECORD_DELETE = "myresearch.projectrecord.delete"
    PROJECT_RECORD_SEARCH = "myresearch.projectrecord.search"
    PROJECT_RECORD_HISTORY_READ = "myresearch.projectrecordhistory.read"
    PROJECT_DOCUMENTS_READ = "myresearch.projectdocuments.read"
    PROJECT_DOCUMENTS_UPDATE = "myresearch.projectdocuments.update"
    PROJECT_DOCUMENTS_UPLOAD = "myresearch.projectdocuments.upload"
    PROJECT_DOCUMENTS_DOWNLOAD = "myresearch.projectdocuments.download"
    PROJECT_DOCUMENTS_DELETE = "myresearch.projectdocuments.delete"
    MODIFICATIONS_CREATE = "myresearch.modifications.create"
    MODIFICATIONS_READ = "myresearch.modifications.read"
    MODIFICATIONS_UPDATE = "myresearch.modifications.update"
    MODIFICATIONS_DELETE = "myresearch.modifications.delete"
    MODIFICATIONS_SEARCH = "myresearch.modifications.search"
    MODIFICATIONS_REVIEW = "myresearch.modifications.review"
    MODIFICATIONS_SUBMIT = "myresearch.modifications.submit"
    MODIFICATIONS_HISTORY_READ = "myresearch.modificationshistory.read"


class Sponsor:
    WORKSPACE_ACCESS = "sponsor.workspace.access"
    MODIFICATIONS_SEARCH = "sponsor.modifications.search"
    MODIFICATIONS_REVIEW = "sponsor.modifications.review"
    MODIFICATIONS_AUTHORISE = "sponsor.modifications.authorise"


class SystemAdministration:
    WORKSPACE_ACCESS = "systemadmin.workspace.access"


class Approvals:
    WORKSPACE_ACCESS = "approvals.workspace.access"
    PROJECT_RECORDS_SEARCH = "approvals.projectrecords.search"
    MODIFICATION_RECORDS_SEARCH = "approvals.modificationrecords.search"
    MODIFICATIONS_ASSIGN = "approvals.modifications.assign"
    MODIFICATIONS_REASSIGN = "approvals.modifications.reassign"
    MODIFICATIONS_READ = "approvals.modifications.read"
    MODIFICATIONS_REVIEW = "approvals.modifications.review"
    MODIFICATIONS_APPROVE = "approvals.modifications.approve"
    MODIFICATIONS_UPDATE = "approvals.modifications.update"


class CAGMembers:
    WORKSPACE_ACCESS = "cagmembers.workspace.access"


class MemberManagement:
    WORKSPACE_ACCESS = "membermanagement.workspace.access"


class CAT:
    WORKSPACE_ACCESS = "cat.workspace.access"


class RECMembers:
    WORKSPACE_ACCESS = "recmembers.workspace.access"


class TechnicalAssurance:
    WORKSPACE_ACCESS = "technicalassurance.workspace.access"


class TechnicalAssuranceReviewers:
    # Reviewers share the technical assurance workspace key.
    WORKSPACE_ACCESS = TechnicalAssurance.WORKSPACE_ACCESS


def _permission(*, key: str, label: str, description: str) -> PermissionDef:
    workspace, _, rest = key.partition(".")
    area, _, action = rest.rpartition(".")
    return PermissionDef(
        key=key,
        workspace=workspace,
        area=area or rest,
        action=action,
        label=label,
        description=description,
    )


PERMISSIONS: tuple[PermissionDef, ...] = (
    # My Research workspace ----------------------------------------------
    _permission(
        key=MyResearch.WORKSPACE_ACCESS,
        label="Access My Research",
        description="See the My Research workspace on the dashboard.",
    ),
    _permission(
        key=MyResearch.PROJECT_RECORD_CREATE,
        label="Create project records",
        description="Start a new project record.",
    ),
    _permission(
        key=MyResearch.PROJECT_RECORD_READ,
        label="Read project records",
        description="Open and view project records.",
    ),
    _permission(
        key=MyResearch.PROJECT_RECORD_UPDATE,
        label="Update project records",
        description="Edit project record details.",
    ),
    _permission(
        key=MyResearch.PROJECT_RECORD_DELETE,
        label="Delete project records",
        description="Delete draft project records.",
    ),
    _permission(
        key=MyResearch.PROJECT_RECORD_SEARCH,
        label="Search project records",
        description="Search and filter project records.",
    ),
    _permission(
        key=MyResearch.PROJECT_RECORD_HISTORY_READ,
        label="Read project record history",
        description="View the audit history of a project record.",
    ),
    _permission(
        key=MyResearch.PROJECT_DOCUMENTS_READ,
        label="Read project documents",
        description="List the documents attached to a project.",
    ),
    _permission(
        key=MyResearch.PROJECT_DOCUMENTS_UPDATE,
        label="Update project documents",
        description="Add or update document metadata.",
    ),
    _permission(
        key=MyResearch.PROJECT_DOCUMENTS_UPLOAD,
        label="Upload project documents",
        description="Upload documents to a project.",
    ),
    _permission(
        key=MyResearch.PROJECT_DOCUMENTS_DOWNLOAD,
        label="Download project documents",
        description="Download documents attached to a project.",
    ),
    _permission(
        key=MyResearch.PROJECT_DOCUMENTS_DELETE,
        label="Delete project documents",
        description="Remove documents from a project.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_CREATE,
        label="Create modifications",
        description="Start a modification to a project record.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_READ,
        label="Read modifications",
        description="View modifications raised against a project.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_UPDATE,
        label="Update modifications",
        description="Edit draft modifications.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_DELETE,
        label="Delete modifications",
        description="Delete draft modifications.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_SEARCH,
        label="Search modifications",
        description="Search and filter modifications.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_REVIEW,
        label="Review modifications",
        description="Review a modification before it is sent on.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_SUBMIT,
        label="Submit modifications",
        description="Send a modification to the sponsor.",
    ),
    _permission(
        key=MyResearch.MODIFICATIONS_HISTORY_READ,
        label="Read modification history",
        description="View the audit history of a modification.",
    ),
    # Sponsor workspace ----------------------------------------------------
    _permission(
        key=Sponsor.WORKSPACE_ACCESS,
        label="Access Sponsor",
        description="See the Sponsor workspace on the dashboard.",
    ),
    _permission(
        key=Sponsor.MODIFICATIONS_SEARCH,
        label="Search sponsor modifications",
        description="Search modifications awaiting sponsor action.",
    ),
    _permission(
        key=Sponsor.MODIFICATIONS_REVIEW,
        label="Review sponsor modifications",
        description="Review modifications sent to the sponsor.",
    ),
    _permission(
        key=Sponsor.MODIFICATIONS_AUTHORISE,
        label="Authorise modifications",
        description="Authorise or decline a modification on behalf of the sponsor.",
    ),
    # System administration workspace -------------------------------------
    _permission(
        key=SystemAdministration.WORKSPACE_ACCESS,
        label="Access System Administration",
        description="See the System Administration workspace on the dashboard.",
    ),
    # Approvals workspace --------------------------------------------------
    _permission(
        key=Approvals.WORKSPACE_ACCESS,
        label="Access Approvals",
        description="See the Approvals workspace on the dashboard.",
    ),
    _permission(
        key=Approvals.PROJECT_RECORDS_SEARCH,
        label="Search project records for approval",
        description="Search project records held by the review body.",
    ),
    _permission(
        key=Approvals.MODIFICATION_RECORDS_SEARCH,
        label="Search modification records for approval",
        description="Search modifications held by the review body.",
    ),
    _permission(
        key=Approvals.MODIFICATIONS_ASSIGN,
        label="Assign modifications",
        description="Assign modifications to a reviewer.",
    ),
    _permission(
        key=Approvals.MODIFICATIONS_REASSIGN,
        label="Reassign modifications",
        description="Move modifications between reviewers.",
    ),
    _permission(
        key=Approvals.MODIFICATIONS_READ,
        label="Read modifications for approval",
        description="View modifications held by the review body.",
    ),
    _permission(
        key=Approvals.MODIFICATIONS_REVIEW,
        label="Review modifications for approval",
        description="Carry out the review of a modification.",
    ),
    _permission(
        key=Approvals.MODIFICATIONS_APPROVE,
        label="Approve modifications",
        description="Record the review body outcome for a modification.",
    ),
    _permission(
        key=Approvals.MODIFICATIONS_UPDATE,
        label="Update modifications for approval",
        description="Update a modification under review, e.g. to add review comments.",
    ),
    # Other workspaces -----------------------------------------------------
    _permission(
        key=CAGMembers.WORKSPACE_ACCESS,
        label="Access CAG Members",
        description="See the CAG Members workspace on the dashboard.",
    ),
    _permission(
        key=MemberManagement.WORKSPACE_ACCESS,
        label="Access Member Management",
        description="See the Member Management workspace on the dashboard.",
    ),
    _permission(
        key=CAT.WORKSPACE_ACCESS,
        label="Access CAT",
        description="See the CAT workspace on the dashboard.",
    ),
    _permission(
        key=RECMembers.WORKSPACE_ACCESS,
        label="Access REC Members",
        description="See the REC Members workspace on the dashboard.",
    ),
    _permission(
        key=TechnicalAssurance.WORKSPACE_ACCESS,
        label="Access Technical Assurance",
        description="See the Technical Assurance workspace on the dashboard.",
    ),
)

PERMISSION_REGISTRY: Mapping[str, PermissionDef] = MappingProxyType(
    {definition.key: definition for definition in PERMISSIONS}
)


def get_permission(key: str) -> PermissionDef | None:
    return PERMISSION_REGISTRY.get(key)


def is_registered(key: str) -> bool:
    return key in PERMISSION_REGISTRY


__all__ = [
    "CAT",
    "Approvals",
    "CAGMembers",
    "MemberManagement",
    "MyResearch",
    "PERMISSIONS",
    "PERMISSION_REGISTRY",
    "RECMembers",
    "Sponsor",
    "SystemAdministration",
    "TechnicalAssurance",
    "TechnicalAssuranceReviewers",
    "get_permission",
    "is_registered",
]
