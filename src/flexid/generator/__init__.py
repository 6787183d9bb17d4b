"""Id generation and decoding: the FlexId codec and its builder."""

from flexid.generator.builder import FlexIdBuilder, RandomSource
from flexid.generator.generator import Clock, FlexId, system_clock
from flexid.generator.models import (
    DEFAULT_EPOCH,
    INSTAGRAM_EPOCH,
    UNIX_EPOCH,
    DecodedId,
    GeneratorState,
)

__all__ = [
    "FlexId",
    "FlexIdBuilder",
    "GeneratorState",
    "DecodedId",
    "Clock",
    "RandomSource",
    "system_clock",
    "UNIX_EPOCH",
    "DEFAULT_EPOCH",
    "INSTAGRAM_EPOCH",
]
