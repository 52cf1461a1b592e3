"""Base component class and specification types for pipeline steps."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from .context import ExecutionContext


@dataclass
class InputSpec:
    """Specification for a component input."""
    type: str  # e.g., "string", "list[string]", "any"
    required: bool = True
    description: str = ""


@dataclass
class OutputSpec:
    """Specification for a component output."""
    type: str
    description: str = ""


@dataclass
class ConfigSpec:
    """Specification for a component configuration option."""
    type: str  # "string", "integer", "boolean", "list", "dict"
    required: bool = False
    default: Any = None
    description: str = ""
    choices: list[Any] | None = None


@dataclass
class ComponentManifest:
    """Self-description of a component's interface."""
    type: str  # e.g., "transform/lookup_entity"
    description: str
    config: dict[str, ConfigSpec] = field(default_factory=dict)
    inputs: dict[str, InputSpec] = field(default_factory=dict)
    outputs: dict[str, OutputSpec] = field(default_factory=dict)
    category: Literal["source", "transform", "sink"] = "transform"


@dataclass
class ValidationResult:
    """Result of validating component inputs."""
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


class Component(ABC):
    """
    Base class for import pipeline steps.

    Each component:
    - Declares its inputs, outputs, and configuration via describe()
    - Validates its inputs via validate()
    - Transforms one pipeline item via execute()

    Collaborators such as the record store are never looked up globally;
    components receive them through the ExecutionContext.
    """

    def __init__(self, instance_id: str, config: dict[str, Any]):
        """
        Initialize component with instance ID and configuration.

        Args:
            instance_id: Unique identifier for this step in the pipeline
            config: Configuration values for the step
        """
        self.instance_id = instance_id
        self.config = config
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate configuration against manifest."""
        manifest = self.describe()
        for name, spec in manifest.config.items():
            if spec.required and name not in self.config and spec.default is None:
                raise ValueError(
                    f"Component {self.instance_id}: missing required config '{name}'"
                )
            # Empty values are allowed through; the step treats them as "not configured"
            if self.config.get(name) and spec.choices:
                if self.config[name] not in spec.choices:
                    raise ValueError(
                        f"Component {self.instance_id}: config '{name}' must be one of {spec.choices}"
                    )

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value with fallback to spec default."""
        if key in self.config:
            return self.config[key]
        manifest = self.describe()
        if key in manifest.config:
            return manifest.config[key].default
        return default

    def resolved_config(self) -> dict[str, Any]:
        """Configuration with every manifest default filled in."""
        manifest = self.describe()
        return {name: self.get_config(name) for name in manifest.config}

    def report(self, message: str, context: "ExecutionContext") -> None:
        """Print a message in NORMAL and DEBUG modes."""
        from .context import OutputMode
        if context.output_mode in (OutputMode.NORMAL, OutputMode.DEBUG):
            print(message, flush=True)

    def debug(self, message: str, context: "ExecutionContext") -> None:
        """Print a message only in DEBUG mode."""
        from .context import OutputMode
        if context.output_mode == OutputMode.DEBUG:
            print(f"[DEBUG] {message}", flush=True)

    @classmethod
    @abstractmethod
    def describe(cls) -> ComponentManifest:
        """Return the component's manifest describing its interface."""

    def validate(self, inputs: dict[str, Any]) -> ValidationResult:
        """Validate that provided inputs satisfy requirements."""
        return ValidationResult(errors=[
            f"Missing required input: {name}"
            for name, spec in self.describe().inputs.items()
            if spec.required and name not in inputs
        ])

    @abstractmethod
    async def execute(
        self,
        inputs: dict[str, Any],
        context: "ExecutionContext"
    ) -> dict[str, Any]:
        """
        Execute the component and return outputs.

        Args:
            inputs: Resolved input values for the current item
            context: Execution context carrying injected services

        Returns:
            Dictionary mapping output names to values
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.instance_id!r})"
