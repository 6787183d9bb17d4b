"""Fluent construction of generators.

A built FlexId has no setters: its layout is frozen and its state can only
advance through generation. Anything a caller wants to choose up front,
including random seeding, goes through the builder.

Usage:
    import random

    generator = (
        FlexIdBuilder()
        .with_epoch(DEFAULT_EPOCH)
        .with_sequence_bits(10)
        .with_shard_bits(6)
        .with_random_sequence(random.SystemRandom())
        .build()
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from flexid.core.layout import MAX_FIELD_BITS
from flexid.core.sharding import DEFAULT_WINDOW, HashWindow
from flexid.generator.generator import Clock, FlexId
from flexid.generator.models import UNIX_EPOCH, GeneratorState

if TYPE_CHECKING:
    from flexid.config.settings import GeneratorSettings
    from flexid.diagnostics.protocol import DiagnosticListener


class RandomSource(Protocol):
    """Anything with ``getrandbits``, e.g. ``random.Random`` or ``random.SystemRandom``."""

    def getrandbits(self, k: int, /) -> int: ...


class FlexIdBuilder:
    """Collects layout and initial state, then builds a FlexId.

    Every ``with_*`` method returns the builder itself. Layout errors surface
    from ``build()`` as ConfigurationError.
    """

    def __init__(self) -> None:
        self._epoch = UNIX_EPOCH
        self._sequence_bits = 8
        self._shard_bits = 8
        self._constant_bits = 0
        self._check_bits = 0
        self._hash_window = DEFAULT_WINDOW
        self._sequence = 0
        self._shard = 0
        self._constant = 0
        self._clock: Clock | None = None
        self._listener: DiagnosticListener | None = None

    @classmethod
    def from_settings(cls, settings: GeneratorSettings) -> FlexIdBuilder:
        """Start from a GeneratorSettings instance."""
        return (
            cls()
            .with_epoch(settings.epoch)
            .with_sequence_bits(settings.sequence_bits)
            .with_shard_bits(settings.shard_bits)
            .with_constant_bits(settings.constant_bits)
            .with_check_bits(settings.check_bits)
            .with_hash_window(HashWindow(settings.hash_width_bits, settings.hash_offset))
            .with_shard(settings.shard)
            .with_constant(settings.constant)
        )

    # --- Layout ---

    def with_epoch(self, epoch: int) -> FlexIdBuilder:
        self._epoch = epoch
        return self

    def with_sequence_bits(self, bits: int) -> FlexIdBuilder:
        self._sequence_bits = bits
        return self

    def with_shard_bits(self, bits: int) -> FlexIdBuilder:
        self._shard_bits = bits
        return self

    def with_constant_bits(self, bits: int) -> FlexIdBuilder:
        self._constant_bits = bits
        return self

    def with_check_bits(self, bits: int) -> FlexIdBuilder:
        self._check_bits = bits
        return self

    def with_hash_window(self, window: HashWindow) -> FlexIdBuilder:
        self._hash_window = window
        return self

    # --- Initial state ---

    def with_sequence(self, sequence: int) -> FlexIdBuilder:
        """Set the first sequence value instead of starting from 0."""
        self._sequence = sequence
        return self

    def with_shard(self, shard: int) -> FlexIdBuilder:
        """Set the shard used when ``generate()`` is called without one."""
        self._shard = shard
        return self

    def with_constant(self, constant: int) -> FlexIdBuilder:
        self._constant = constant
        return self

    def with_random_sequence(self, rng: RandomSource) -> FlexIdBuilder:
        """Start the sequence at a random value.

        Useful when generators restart often and should not all begin at 0.
        """
        return self.with_sequence(rng.getrandbits(MAX_FIELD_BITS))

    def with_random_shard(self, rng: RandomSource) -> FlexIdBuilder:
        """Pick a random shard when there is no better way to partition ids."""
        return self.with_shard(rng.getrandbits(MAX_FIELD_BITS))

    # --- Collaborators ---

    def with_clock(self, clock: Clock) -> FlexIdBuilder:
        """Use ``clock`` (Unix milliseconds) instead of the system clock."""
        self._clock = clock
        return self

    def with_listener(self, listener: DiagnosticListener) -> FlexIdBuilder:
        """Receive the layout diagnostic when the generator is built."""
        self._listener = listener
        return self

    def build(self) -> FlexId:
        """Create a generator with its own fresh state.

        Raises:
            ConfigurationError: If the layout or hash window is invalid.
        """
        state = GeneratorState(sequence=self._sequence, shard=self._shard, constant=self._constant)
        return FlexId(
            epoch=self._epoch,
            sequence_bits=self._sequence_bits,
            shard_bits=self._shard_bits,
            constant_bits=self._constant_bits,
            check_bits=self._check_bits,
            hash_window=self._hash_window,
            state=state,
            clock=self._clock,
            listener=self._listener,
        )
