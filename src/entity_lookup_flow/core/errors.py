"""Error types for the component framework."""

from __future__ import annotations

from typing import Any


class DataflowError(Exception):
    """Base exception for all pipeline framework errors."""
    pass


class ValidationError(DataflowError):
    """Error during component or configuration validation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ComponentError(DataflowError):
    """Error within a component's execution."""

    def __init__(
        self,
        message: str,
        component_id: str,
        inputs: dict[str, Any] | None = None,
        cause: Exception | None = None
    ):
        super().__init__(message)
        self.component_id = component_id
        self.inputs = inputs
        self.cause = cause
