"""Identifiers for roles, workspaces, entity types and record statuses."""

from __future__ import annotations


class Roles:
    SYSTEM_ADMINISTRATOR = "SystemAdministrator"
    APPLICANT = "Applicant"
    SPONSOR = "Sponsor"
    ORGANISATION_ADMINISTRATOR = "OrganisationAdministrator"
    WORKFLOW_COORDINATOR = "WorkflowCoordinator"
    TEAM_MANAGER = "TeamManager"
    STUDY_WIDE_REVIEWER = "StudyWideReviewer"


class Workspaces:
    PROFILE = "profile"
    MY_RESEARCH = "myresearch"
    SPONSOR = "sponsor"
    SYSTEM_ADMINISTRATION = "systemadmin"
    APPROVALS = "approvals"


class EntityTypes:
    PROJECT_RECORD = "ProjectRecord"
    MODIFICATION = "Modification"
    DOCUMENT = "Document"


class ProjectRecordStatus:
    IN_DRAFT = "InDraft"
    ACTIVE = "Active"


class ModificationStatus:
    MODIFICATION_RECORD_STARTED = "ModificationRecordStarted"
    CHANGE_READY_FOR_SUBMISSION = "ChangeReadyForSubmission"
    IN_DRAFT = "InDraft"
    WITH_SPONSOR = "WithSponsor"
    REVISE_AND_AUTHORISE = "ReviseAndAuthorise"
    AUTHORISED = "Authorised"
    NOT_AUTHORISED = "NotAuthorised"
    WITH_REVIEW_BODY = "WithReviewBody"
    RECEIVED = "Received"
    REVIEW_IN_PROGRESS = "ReviewInProgress"
    REQUEST_FOR_INFORMATION = "RequestForInformation"
    REQUEST_REVISIONS = "RequestRevisions"
    APPROVED = "Approved"
    NOT_APPROVED = "NotApproved"
    WITHDRAWN = "Withdrawn"


class DocumentStatus:
    UPLOADED = "Uploaded"
    FAILED = "Failed"
    INCOMPLETE = "Incomplete"
    COMPLETE = "Complete"
    WITH_SPONSOR = "WithSponsor"
    WITH_REVIEW_BODY = "WithReviewBody"
    RECEIVED = "Received"
    REVIEW_IN_PROGRESS = "ReviewInProgress"
    APPROVED = "Approved"
    NOT_AUTHORISED = "NotAuthorised"
    NOT_APPROVED = "NotApproved"


class UserStatus:
    ACTIVE = "Active"
    DISABLED = "Disabled"


__all__ = [
    "DocumentStatus",
    "EntityTypes",
    "ModificationStatus",
    "ProjectRecordStatus",
    "Roles",
    "UserStatus",
    "Workspaces",
]
