"""Core pipeline component framework."""

from .component import (
    Component,
    ComponentManifest,
    InputSpec,
    OutputSpec,
    ConfigSpec,
    ValidationResult,
)
from .registry import ComponentRegistry, register_component, auto_discover_components
from .context import ExecutionContext, OutputMode
from .errors import (
    DataflowError,
    ValidationError,
    ComponentError,
)

__all__ = [
    # Component
    "Component",
    "ComponentManifest",
    "InputSpec",
    "OutputSpec",
    "ConfigSpec",
    "ValidationResult",
    # Registry
    "ComponentRegistry",
    "register_component",
    "auto_discover_components",
    # Context
    "ExecutionContext",
    "OutputMode",
    # Errors
    "DataflowError",
    "ValidationError",
    "ComponentError",
]
