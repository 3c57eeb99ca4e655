"""Runtime settings, read once from the environment.

Every variable is optional; the defaults give a working SQLite set-up
under ``<repo>/data``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from bos.domain.model.order_status import StatusPolicy

# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

DEFAULT_DATABASE_URL = f"sqlite:///{_DATA_DIR / 'bos.db'}"
DEFAULT_LOCK_TIMEOUT_MS = 5000
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    lock_timeout_ms: int = DEFAULT_LOCK_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL
    status_policy: StatusPolicy = field(default_factory=StatusPolicy)

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``BOS_*`` variables.

        Raises ValueError for malformed values so a bad deployment fails
        at start-up rather than on the first request.
        """
        env = os.environ if environ is None else environ

        lock_timeout = env.get("BOS_LOCK_TIMEOUT_MS", str(DEFAULT_LOCK_TIMEOUT_MS))
        try:
            lock_timeout_ms = int(lock_timeout)
        except ValueError:
            raise ValueError(f"BOS_LOCK_TIMEOUT_MS must be an integer, got {lock_timeout!r}")
        if lock_timeout_ms <= 0:
            raise ValueError("BOS_LOCK_TIMEOUT_MS must be positive")

        log_level = env.get("BOS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Unknown BOS_LOG_LEVEL: {log_level!r}")

        return Settings(
            database_url=env.get("BOS_DATABASE_URL", DEFAULT_DATABASE_URL),
            lock_timeout_ms=lock_timeout_ms,
            log_level=log_level,
            status_policy=_policy_from_env(env),
        )


def _policy_from_env(env: Mapping[str, str]) -> StatusPolicy:
    raw_transitions = env.get("BOS_STATUS_TRANSITIONS")
    raw_restock = env.get("BOS_RESTOCK_ON_CANCEL_FROM")
    if raw_transitions is None and raw_restock is None:
        return StatusPolicy()

    restock = None
    if raw_restock is not None:
        restock = [label.strip() for label in raw_restock.split(",") if label.strip()]

    if raw_transitions is None:
        default = StatusPolicy()
        transitions = {
            source.value: [target.value for target in targets]
            for source, targets in default.transitions.items()
        }
    else:
        try:
            transitions = json.loads(raw_transitions)
        except json.JSONDecodeError as exc:
            raise ValueError(f"BOS_STATUS_TRANSITIONS is not valid JSON: {exc}") from exc
        if not isinstance(transitions, dict) or not all(
            isinstance(targets, list) for targets in transitions.values()
        ):
            raise ValueError(
                "BOS_STATUS_TRANSITIONS must map each status to a list of statuses"
            )

    return StatusPolicy.from_mapping(transitions, restock_on_cancel_from=restock)
