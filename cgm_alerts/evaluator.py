"""Entry points for evaluating a single alert kind."""
from __future__ import annotations

from typing import Callable, Optional

from . import checkers  # noqa: F401 - ensure checker registration side-effects
from .clock import utc_now
from .display import BgFormatter, GlucoseFormatter
from .models import AlertContext, AlertDecision, AlertKind
from .registry import CheckerRegistry, registry as default_registry

_DEFAULT_FORMATTER = GlucoseFormatter()


def alert_needed_checker(
    kind: AlertKind,
    *,
    formatter: Optional[BgFormatter] = None,
    registry: Optional[CheckerRegistry] = None,
) -> Callable[[AlertContext], AlertDecision]:
    """Return the decision function for ``kind``.

    The returned callable is pure given ``context.now``; when the context has
    no ``now`` the current UTC time is used.
    """

    checker = (registry or default_registry).get(kind)
    display = formatter or _DEFAULT_FORMATTER

    def _decide(context: AlertContext) -> AlertDecision:
        now = context.now if context.now is not None else utc_now()
        return checker(context, display, now)

    return _decide


def evaluate(
    kind: AlertKind,
    context: AlertContext,
    formatter: Optional[BgFormatter] = None,
    *,
    registry: Optional[CheckerRegistry] = None,
) -> AlertDecision:
    """Evaluate ``kind`` against ``context``."""

    return alert_needed_checker(kind, formatter=formatter, registry=registry)(context)
