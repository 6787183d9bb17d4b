"""Configuration module using Pydantic Settings.

Provides typed generator configuration with environment variable support.

Usage:
    from flexid.config import GeneratorSettings

    settings = GeneratorSettings(sequence_bits=10)
"""

from flexid.config.settings import GeneratorSettings

__all__ = [
    "GeneratorSettings",
]
