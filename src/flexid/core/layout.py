"""Bit layout of a 64-bit id.

Fields are packed most-significant-first in a fixed order:

    | time | sequence | shard | constant | check |

The time field takes every bit the other fields leave free, minus bit 63,
so ids stay non-negative when stored in signed 64-bit columns.

Usage:
    layout = BitLayout(sequence_bits=10, shard_bits=8)
    layout.time_bits      # 45
    layout.shard_mask     # 0xFF
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flexid.core.errors import ConfigurationError

ID_BITS = 64
"""Width of an id."""

SIGNED_TIME_LIMIT = ID_BITS - 1
"""Bits available to all fields when bit 63 must stay clear."""

MAX_FIELD_BITS = 15
"""Upper bound for the sequence, shard and constant widths."""

CHECKSUM_BITS = 4
"""Width of the checksum field when enabled."""

U64_MASK = (1 << ID_BITS) - 1


def mask_for(bits: int) -> int:
    """Mask covering the lowest ``bits`` bits."""
    return (1 << bits) - 1


def to_unsigned(value: int) -> int:
    """Reduce an int to its unsigned 64-bit reading."""
    return value & U64_MASK


def to_signed(value: int) -> int:
    """Reinterpret the low 64 bits of an int as a signed 64-bit value.

    Useful when storing ids in ``BIGINT`` columns that reject values
    with bit 63 set.
    """
    value &= U64_MASK
    return value - (1 << ID_BITS) if value >> SIGNED_TIME_LIMIT else value


def _check_width(name: str, value: int, allowed: range | tuple[int, ...]) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an int, got {type(value).__name__}")
    if value not in allowed:
        if isinstance(allowed, range):
            raise ConfigurationError(
                f"{name} must be between {allowed.start} and {allowed.stop - 1}, got {value}"
            )
        raise ConfigurationError(f"{name} must be one of {allowed}, got {value}")


@dataclass(frozen=True, slots=True)
class BitLayout:
    """Immutable field widths, masks and shifts of an id.

    Attributes:
        sequence_bits: Width of the per-millisecond counter (0-15).
        shard_bits: Width of the shard/partition field (0-15).
        constant_bits: Width of the optional fixed field (0-15).
        check_bits: Width of the checksum field (0 or 4).

    Raises:
        ConfigurationError: If any width is out of range or the low fields
            leave no room for the time field.
    """

    sequence_bits: int = 8
    shard_bits: int = 8
    constant_bits: int = 0
    check_bits: int = 0

    time_bits: int = field(init=False)
    sequence_mask: int = field(init=False, repr=False)
    shard_mask: int = field(init=False, repr=False)
    constant_mask: int = field(init=False, repr=False)
    check_mask: int = field(init=False, repr=False)
    constant_shift: int = field(init=False, repr=False)
    shard_shift: int = field(init=False, repr=False)
    sequence_shift: int = field(init=False, repr=False)
    time_shift: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        field_range = range(0, MAX_FIELD_BITS + 1)
        _check_width("sequence_bits", self.sequence_bits, field_range)
        _check_width("shard_bits", self.shard_bits, field_range)
        _check_width("constant_bits", self.constant_bits, field_range)
        _check_width("check_bits", self.check_bits, (0, CHECKSUM_BITS))

        low_bits = self.sequence_bits + self.shard_bits + self.constant_bits + self.check_bits
        if low_bits > SIGNED_TIME_LIMIT:
            raise ConfigurationError(
                f"Layout uses {low_bits} low bits, at most {SIGNED_TIME_LIMIT} are available"
            )

        # frozen dataclass: derived fields go through object.__setattr__
        derived = {
            "time_bits": SIGNED_TIME_LIMIT - low_bits,
            "sequence_mask": mask_for(self.sequence_bits),
            "shard_mask": mask_for(self.shard_bits),
            "constant_mask": mask_for(self.constant_bits),
            "check_mask": mask_for(self.check_bits),
            "constant_shift": self.check_bits,
            "shard_shift": self.check_bits + self.constant_bits,
            "sequence_shift": self.check_bits + self.constant_bits + self.shard_bits,
            "time_shift": low_bits,
        }
        for name, value in derived.items():
            object.__setattr__(self, name, value)

    @property
    def has_checksum(self) -> bool:
        """True if ids carry a checksum nibble."""
        return self.check_bits == CHECKSUM_BITS

    @property
    def total_bits(self) -> int:
        """Bits used by all fields, time included."""
        return (
            self.time_bits
            + self.sequence_bits
            + self.shard_bits
            + self.constant_bits
            + self.check_bits
        )

    @property
    def time_range_millis(self) -> int:
        """Milliseconds representable by the time field."""
        return 1 << self.time_bits
