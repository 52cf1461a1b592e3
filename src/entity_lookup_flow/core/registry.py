"""Component registry for type-based instantiation with auto-discovery."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import TYPE_CHECKING, Type

if TYPE_CHECKING:
    from .component import Component

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """
    Registry mapping component type strings to component classes.

    Pipelines reference steps by type string (e.g. "transform/lookup_entity")
    and the registry instantiates the matching class.
    """

    _instance: "ComponentRegistry | None" = None

    def __init__(self):
        self._components: dict[str, Type["Component"]] = {}

    @classmethod
    def get_instance(cls) -> "ComponentRegistry":
        """Get the singleton registry instance."""
        if cls._instance is None:
            cls._instance = ComponentRegistry()
        return cls._instance

    def register(self, component_type: str, component_class: Type["Component"]) -> None:
        """Register a component class under a type string."""
        existing = self._components.get(component_type)
        if existing is not None and existing is not component_class:
            raise ValueError(f"Component type already registered: {component_type}")
        self._components[component_type] = component_class

    def get(self, component_type: str) -> Type["Component"] | None:
        """Get a component class by type string."""
        return self._components.get(component_type)

    def create(
        self,
        component_type: str,
        instance_id: str,
        config: dict
    ) -> "Component":
        """
        Create a component instance.

        Raises:
            ValueError: If component type is not registered
        """
        component_class = self.get(component_type)
        if component_class is None:
            raise ValueError(f"Unknown component type: {component_type}")
        return component_class(instance_id, config)

    def list_types(self) -> list[str]:
        """List all registered component types."""
        return sorted(self._components.keys())

    def list_by_category(self, category: str) -> list[str]:
        """List component types in a category (source, transform, sink)."""
        return [t for t in self.list_types() if t.startswith(f"{category}/")]

    def get_manifest(self, component_type: str) -> dict | None:
        """Get the manifest for a component type as plain data."""
        component_class = self.get(component_type)
        if component_class is None:
            return None
        manifest = component_class.describe()
        return {
            "type": manifest.type,
            "description": manifest.description,
            "category": manifest.category,
            "config": {k: {"type": v.type, "required": v.required, "default": v.default,
                           "description": v.description, "choices": v.choices}
                       for k, v in manifest.config.items()},
            "inputs": {k: {"type": v.type, "required": v.required, "description": v.description}
                       for k, v in manifest.inputs.items()},
            "outputs": {k: {"type": v.type, "description": v.description}
                        for k, v in manifest.outputs.items()},
        }

    def generate_docs(self, category: str | None = None) -> str:
        """Generate markdown documentation for registered components."""
        lines = []
        types = self.list_by_category(category) if category else self.list_types()

        for comp_type in types:
            manifest = self.get_manifest(comp_type)
            if not manifest:
                continue

            lines.append(f"### `{comp_type}`")
            lines.append(f"{manifest['description']}\n")

            if manifest['config']:
                lines.append("**Config:**")
                for name, spec in manifest['config'].items():
                    req = " (required)" if spec['required'] else ""
                    default = f" = `{spec['default']}`" if spec['default'] not in (None, "") else ""
                    choices = f" (one of {', '.join(spec['choices'])})" if spec['choices'] else ""
                    lines.append(f"- `{name}`: {spec['type']}{req}{default}{choices} - {spec['description']}")
                lines.append("")

            if manifest['inputs']:
                lines.append("**Inputs:**")
                for name, spec in manifest['inputs'].items():
                    req = " (required)" if spec['required'] else ""
                    lines.append(f"- `{name}`: {spec['type']}{req} - {spec['description']}")
                lines.append("")

            if manifest['outputs']:
                lines.append("**Outputs:**")
                for name, spec in manifest['outputs'].items():
                    lines.append(f"- `{name}`: {spec['type']} - {spec['description']}")
                lines.append("")

            lines.append("---\n")

        return "\n".join(lines)


def register_component(component_type: str):
    """
    Decorator to register a component class.

    Usage:
        @register_component("transform/lookup_entity")
        class EntityLookupTransform(Component):
            ...
    """
    def decorator(cls: Type["Component"]) -> Type["Component"]:
        ComponentRegistry.get_instance().register(component_type, cls)
        return cls
    return decorator


def auto_discover_components(package: ModuleType) -> list[str]:
    """
    Import every module below a components package so their
    @register_component decorators run.

    Returns:
        Sorted list of newly registered component type strings
    """
    registry = ComponentRegistry.get_instance()
    before = set(registry.list_types())

    for module_info in pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}."):
        if module_info.name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            importlib.import_module(module_info.name)
        except ImportError as e:
            logger.warning(f"Failed to import {module_info.name}: {e}")

    after = set(registry.list_types())
    return sorted(after - before)
