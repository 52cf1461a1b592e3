"""Pipeline components - auto-discovered on import."""

import sys

from ..core.registry import auto_discover_components

_discovered = auto_discover_components(sys.modules[__name__])
