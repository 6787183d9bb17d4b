"""Configuration settings using Pydantic Settings.

Provides typed generator configuration with environment variable support for
the command-line tool. The library itself never reads the environment; code
that embeds flexid passes layout values to FlexId or FlexIdBuilder directly.

Usage:
    from flexid.config import GeneratorSettings

    # Load from environment variables (FLEXID_*)
    settings = GeneratorSettings()

    # Or override with explicit values
    settings = GeneratorSettings(sequence_bits=10, shard_bits=6)
    generator = FlexIdBuilder.from_settings(settings).build()
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for an id generator.

    Attributes:
        epoch: Epoch in Unix milliseconds.
        sequence_bits: Width of the sequence field (0-15).
        shard_bits: Width of the shard field (0-15).
        constant_bits: Width of the constant field (0-15).
        check_bits: 4 to embed a checksum nibble, 0 for none.
        shard: Shard used when none is given per id.
        constant: Constant embedded in every id.
        hash_width_bits: Width of the digest window for key sharding (16 or 32).
        hash_offset: Byte offset of the digest window.

    Layout values are validated when the generator is built, which raises
    ConfigurationError for out-of-range widths.

    Environment Variables:
        FLEXID_EPOCH
        FLEXID_SEQUENCE_BITS
        FLEXID_SHARD_BITS
        FLEXID_CONSTANT_BITS
        FLEXID_CHECK_BITS
        FLEXID_SHARD
        FLEXID_CONSTANT
        FLEXID_HASH_WIDTH_BITS
        FLEXID_HASH_OFFSET
    """

    model_config = SettingsConfigDict(
        env_prefix="FLEXID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    epoch: int = 0
    sequence_bits: int = 8
    shard_bits: int = 8
    constant_bits: int = 0
    check_bits: int = 0
    shard: int = 0
    constant: int = 0
    hash_width_bits: int = 32
    hash_offset: int = 0
