"""Errors raised by the HTTP adapter around the evaluator.

Evaluation itself never raises for missing data; these only signal that a
request had nobody to evaluate, or that a requirement failed.
"""


class AuthenticationError(Exception):
    """The request carries neither a principal snapshot nor claims."""


class PermissionDeniedError(Exception):
    """A principal failed a permission or workspace requirement."""

    def __init__(self, requirement: str, *, scope_type: str | None = None) -> None:
        self.requirement = requirement
        self.scope_type = scope_type
        scope = f" ({scope_type})" if scope_type else ""
        super().__init__(f"Requirement '{requirement}'{scope} not satisfied")
