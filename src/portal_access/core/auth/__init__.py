"""Claims, principal snapshots and the evaluator built on top of them."""

from .claims import (
    Claim,
    ClaimSet,
    ClaimSource,
    EnumerableClaimSource,
    allowed_statuses_claim,
    as_values,
)
from .errors import AuthenticationError, PermissionDeniedError
from .evaluator import PrincipalEvaluator, get_evaluator, reset_evaluator
from .principal import PrincipalSnapshot
from .requirements import PermissionRequirement, WorkspaceRequirement, resolve_policy
from .visibility import MatchMode, VisibilityRule, is_visible

__all__ = [
    "AuthenticationError",
    "Claim",
    "ClaimSet",
    "ClaimSource",
    "EnumerableClaimSource",
    "MatchMode",
    "PermissionDeniedError",
    "PermissionRequirement",
    "PrincipalEvaluator",
    "PrincipalSnapshot",
    "VisibilityRule",
    "WorkspaceRequirement",
    "allowed_statuses_claim",
    "as_values",
    "get_evaluator",
    "is_visible",
    "reset_evaluator",
    "resolve_policy",
]
