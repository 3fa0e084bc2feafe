"""RBAC type definitions used across the engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionDef:
    """Static permission definition.

    ``workspace``, ``area`` and ``action`` are informational only; matching is
    always done on the full ``key``.
    """

    key: str
    workspace: str
    area: str
    action: str
    label: str
    description: str
