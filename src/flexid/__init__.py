"""FlexId: coordinator-free, time-ordered 64-bit ids.

Usage:
    from flexid import DEFAULT_EPOCH, FlexId

    generator = FlexId(epoch=DEFAULT_EPOCH, sequence_bits=10, shard_bits=8)
    new_id = generator.generate(key="customer:1001")

    generator.extract_timestamp(new_id)
    generator.extract_sequence(new_id)
    generator.extract_shard(new_id, 4)   # map 256 logical shards onto 16 physical
"""

__version__ = "0.1.0"

# Core primitives
from flexid.core import (
    BitLayout,
    ConfigurationError,
    FlexIdError,
    HashWindow,
    InvalidArgumentError,
    checksum_encode,
    checksum_validate,
    shard_from_key,
    to_signed,
    to_unsigned,
)

# Diagnostics
from flexid.diagnostics import (
    DiagnosticListener,
    LayoutDiagnostic,
    LoggingListener,
)

# Generator
from flexid.generator import (
    DEFAULT_EPOCH,
    INSTAGRAM_EPOCH,
    UNIX_EPOCH,
    DecodedId,
    FlexId,
    FlexIdBuilder,
    GeneratorState,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "BitLayout",
    "HashWindow",
    "shard_from_key",
    "checksum_encode",
    "checksum_validate",
    "to_signed",
    "to_unsigned",
    "FlexIdError",
    "ConfigurationError",
    "InvalidArgumentError",
    # Generator
    "FlexId",
    "FlexIdBuilder",
    "GeneratorState",
    "DecodedId",
    "UNIX_EPOCH",
    "DEFAULT_EPOCH",
    "INSTAGRAM_EPOCH",
    # Diagnostics
    "LayoutDiagnostic",
    "DiagnosticListener",
    "LoggingListener",
]
