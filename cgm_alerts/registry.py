"""Registry mapping each alert kind to its checker function."""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Dict

from .display import BgFormatter
from .models import AlertContext, AlertDecision, AlertKind

AlertChecker = Callable[[AlertContext, BgFormatter, datetime], AlertDecision]


class CheckerRegistry:
    """Keeps track of the checker for every alert kind."""

    def __init__(self) -> None:
        self._checkers: Dict[AlertKind, AlertChecker] = {}

    def register(self, kind: AlertKind, checker: AlertChecker) -> AlertChecker:
        if kind in self._checkers:
            raise ValueError(f"Checker for alert kind '{kind.value}' already registered")
        self._checkers[kind] = checker
        return checker

    def get(self, kind: AlertKind) -> AlertChecker:
        return self._checkers[kind]

    def kinds(self) -> list[AlertKind]:
        return [kind for kind in AlertKind if kind in self._checkers]

    def __contains__(self, kind: object) -> bool:
        return kind in self._checkers

    def __len__(self) -> int:
        return len(self._checkers)


registry = CheckerRegistry()


def register_checker(*kinds: AlertKind) -> Callable[[AlertChecker], AlertChecker]:
    """Decorator registering one checker for one or more alert kinds."""

    def _decorator(checker: AlertChecker) -> AlertChecker:
        for kind in kinds:
            registry.register(kind, checker)
        return checker

    return _decorator
