"""Checker package that ensures registration on import."""
from __future__ import annotations

import pkgutil
from importlib import import_module


def _discover_checker_modules() -> list[str]:
    """Return sorted module names containing checker definitions."""

    module_names: list[str] = []
    for module_info in pkgutil.iter_modules(__path__):
        if module_info.ispkg or module_info.name.startswith("_"):
            continue
        module_names.append(module_info.name)
    module_names.sort()
    return module_names


_CHECKER_MODULES = _discover_checker_modules()


def register_all_checkers() -> None:
    """Import each checker module; functions self-register via decorator."""

    for module_name in _CHECKER_MODULES:
        import_module(f"{__name__}.{module_name}")


register_all_checkers()

__all__ = list(_CHECKER_MODULES)
