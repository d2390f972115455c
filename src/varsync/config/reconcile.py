"""Defaults for variable reconciliation services."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    validate: bool = True


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(validate=env_flag("VARSYNC_VALIDATE", default=True))
