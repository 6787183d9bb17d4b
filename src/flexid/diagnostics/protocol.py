"""Protocols and listeners for construction-time diagnostics.

Generators report their layout once, when built. Listeners are purely
observational: nothing they do feeds back into id generation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flexid.diagnostics.models import LayoutDiagnostic


@runtime_checkable
class DiagnosticListener(Protocol):
    """Protocol for receiving a generator's layout diagnostic.

    Any callable taking a single LayoutDiagnostic satisfies it, so plain
    functions, bound methods and lambdas all work.

    Usage:
        seen = []
        FlexIdBuilder().with_listener(seen.append).build()
        seen[0].time_range_years
    """

    def __call__(self, diagnostic: LayoutDiagnostic) -> None:
        """Receive the diagnostic.

        Args:
            diagnostic: Summary of the generator layout.
        """
        ...


class LoggingListener:
    """Listener that forwards diagnostics to a stdlib logger.

    Args:
        logger: Logger to write to (default: the ``flexid.diagnostics`` logger).
        level: Log level for the summary line.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("flexid.diagnostics")
        self._level = level

    def __call__(self, diagnostic: LayoutDiagnostic) -> None:
        self._logger.log(self._level, diagnostic.message(), extra={"layout": diagnostic.to_dict()})
