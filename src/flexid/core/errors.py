"""Exception taxonomy for id layout configuration and decoding."""

from __future__ import annotations


class FlexIdError(Exception):
    """Base class for all flexid errors."""

    pass


class ConfigurationError(FlexIdError, ValueError):
    """Raised when a bit layout or hash window cannot be constructed.

    Fatal to construction: no layout or generator object is produced.
    """

    pass


class InvalidArgumentError(FlexIdError, ValueError):
    """Raised when a runtime request does not fit the configured layout."""

    pass
