"""Core id primitives: bit layout, errors, checksum and shard derivation."""

from flexid.core.checksum import checksum_encode, checksum_validate
from flexid.core.errors import ConfigurationError, FlexIdError, InvalidArgumentError
from flexid.core.layout import BitLayout, to_signed, to_unsigned
from flexid.core.sharding import HashWindow, shard_from_key

__all__ = [
    "BitLayout",
    "to_signed",
    "to_unsigned",
    "FlexIdError",
    "ConfigurationError",
    "InvalidArgumentError",
    "checksum_encode",
    "checksum_validate",
    "HashWindow",
    "shard_from_key",
]
