"""Operation registry for registering and discovering operations.

Manifesto:
    A central registry lets the CLI and runner find operations by name
    without import-time coupling to the modules that define them.

Tags:
    glossary-spine, framework, registry, operation-discovery

Doc-Types:
    api-reference
"""

import importlib
from collections.abc import Callable
from typing import TYPE_CHECKING

from glossary_spine.framework.logging import get_logger

if TYPE_CHECKING:
    from glossary_spine.framework.operations import Operation

logger = get_logger(__name__)

# Modules imported on first lookup so their @register_operation decorators run
OPERATION_MODULES = ("glossary_spine.publishing.operations",)

_registry: dict[str, type["Operation"]] = {}
_loaded: bool = False


def register_operation(name: str) -> Callable[[type["Operation"]], type["Operation"]]:
    """Decorator to register an operation class."""

    def decorator(cls: type["Operation"]) -> type["Operation"]:
        existing = _registry.get(name)
        # A reloaded module re-registers the same class under the same name
        if existing is not None and (existing.__module__, existing.__qualname__) != (cls.__module__, cls.__qualname__):
            raise ValueError(f"Operation '{name}' is already registered")
        _registry[name] = cls
        logger.debug(
            "operation_registered",
            name=name,
            cls=cls.__name__,
            description=getattr(cls, "description", ""),
        )
        return cls

    return decorator


def _ensure_loaded() -> None:
    global _loaded
    if not _loaded:
        _loaded = True
        _load_operations()


def get_operation(name: str) -> type["Operation"]:
    """Get an operation class by name."""
    _ensure_loaded()
    if name not in _registry:
        available = ", ".join(list_operations()) or "none"
        raise KeyError(f"Operation '{name}' not found. Available: {available}")
    return _registry[name]


def list_operations() -> list[str]:
    """List all registered operation names."""
    _ensure_loaded()
    return sorted(_registry.keys())


def clear_registry() -> None:
    """Clear registry (for testing)."""
    global _loaded
    _registry.clear()
    _loaded = False


def _load_operations() -> None:
    """
    Import the operation modules to trigger registration.

    Modules already imported are reloaded so that a cleared registry is
    repopulated.
    """
    import sys

    for module_name in OPERATION_MODULES:
        if module_name in sys.modules:
            importlib.reload(sys.modules[module_name])
        else:
            importlib.import_module(module_name)
    logger.debug("operation_registry_loaded", registered=len(_registry))
