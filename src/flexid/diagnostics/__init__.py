"""Construction-time diagnostics for id generators.

Usage:
    from flexid.diagnostics import LayoutDiagnostic, LoggingListener

    generator = FlexIdBuilder().with_listener(LoggingListener()).build()
"""

from flexid.diagnostics.models import LayoutDiagnostic, millis_to_datetime
from flexid.diagnostics.protocol import DiagnosticListener, LoggingListener

__all__ = [
    "DiagnosticListener",
    "LayoutDiagnostic",
    "LoggingListener",
    "millis_to_datetime",
]
