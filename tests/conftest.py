"""Shared pytest fixtures for the access-control tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from portal_access.core.auth.evaluator import PrincipalEvaluator, reset_evaluator
from portal_access.core.auth.principal import PrincipalSnapshot
from portal_access.core.rbac.config import default_access_config, reload_access_config
from portal_access.settings import reload_settings

_ENV_VARS = (
    "PORTAL_ACCESS_APP_NAME",
    "PORTAL_ACCESS_LOGGING_LEVEL",
    "PORTAL_ACCESS_CONFIG_FILE",
)


def _reset_caches() -> None:
    reload_settings()
    reload_access_config()
    reset_evaluator()


@pytest.fixture(autouse=True)
def reset_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear env overrides and cached settings/tables between tests."""

    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    _reset_caches()
    yield
    monkeypatch.undo()
    _reset_caches()


@pytest.fixture
def evaluator() -> PrincipalEvaluator:
    return PrincipalEvaluator(default_access_config())


@pytest.fixture
def signed_in(evaluator: PrincipalEvaluator) -> Callable[..., PrincipalSnapshot]:
    """Build the snapshot a sign-in would produce for the given roles."""

    def _build(*roles: str, user_status: str | None = None) -> PrincipalSnapshot:
        return evaluator.issue_snapshot(roles, user_id="user-1", user_status=user_status)

    return _build
