"""Execution context carrying injected services for a pipeline run."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..store.base import RecordStore


class OutputMode(Enum):
    """Controls what components print to console."""
    QUIET = 0   # Nothing (for tests, scripts, piped output)
    NORMAL = 1  # Component-chosen output only (default)
    DEBUG = 2   # Everything + internal details


class ExecutionContext:
    """
    Services shared by every item of one pipeline run.

    Holds no per-item state, so one context can serve any number of
    execute() calls.
    """

    def __init__(
        self,
        record_store: "RecordStore | None" = None,
        output_mode: OutputMode = OutputMode.NORMAL,
    ):
        self.record_store = record_store
        self.output_mode = output_mode
