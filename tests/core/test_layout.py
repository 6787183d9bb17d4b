"""Tests for bit layout configuration.

Critical Invariants:
- Field widths are bounded (0-15, checksum 0 or 4)
- Every layout fits in 63 bits, time included
- Masks and shifts follow the time | sequence | shard | constant | check order
"""

import pytest

from flexid.core import BitLayout, ConfigurationError, to_signed, to_unsigned


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sequence_bits": -1},
        {"sequence_bits": 16},
        {"shard_bits": -1},
        {"shard_bits": 16},
        {"constant_bits": 16},
        {"check_bits": 1},
        {"check_bits": 8},
        {"sequence_bits": 8.0},
        {"shard_bits": True},
    ],
    ids=[
        "negative-sequence",
        "wide-sequence",
        "negative-shard",
        "wide-shard",
        "wide-constant",
        "odd-check",
        "wide-check",
        "float-width",
        "bool-width",
    ],
)
def test_invalid_widths_raise_configuration_error(kwargs) -> None:
    """CRITICAL: Out-of-range widths never produce a layout."""
    with pytest.raises(ConfigurationError):
        BitLayout(**kwargs)


def test_configuration_error_is_value_error() -> None:
    """Callers catching ValueError still see configuration failures."""
    with pytest.raises(ValueError, match="sequence_bits must be between 0 and 15"):
        BitLayout(sequence_bits=20)


@pytest.mark.parametrize(
    ("sequence_bits", "shard_bits", "constant_bits", "check_bits"),
    [(0, 0, 0, 0), (8, 8, 0, 0), (10, 8, 0, 0), (4, 4, 0, 4), (15, 15, 15, 4)],
)
def test_bit_budget_invariant(sequence_bits, shard_bits, constant_bits, check_bits) -> None:
    """INVARIANT: all fields together use exactly 63 bits."""
    layout = BitLayout(sequence_bits, shard_bits, constant_bits, check_bits)

    assert layout.total_bits <= 63
    assert layout.time_bits == 63 - sequence_bits - shard_bits - constant_bits - check_bits


def test_default_layout() -> None:
    layout = BitLayout()

    assert (layout.sequence_bits, layout.shard_bits) == (8, 8)
    assert layout.time_bits == 47
    assert not layout.has_checksum


def test_masks_and_shifts_follow_field_order() -> None:
    layout = BitLayout(sequence_bits=10, shard_bits=8, constant_bits=3, check_bits=4)

    assert layout.sequence_mask == 0x3FF
    assert layout.shard_mask == 0xFF
    assert layout.constant_mask == 0x7
    assert layout.check_mask == 0xF
    assert layout.constant_shift == 4
    assert layout.shard_shift == 7
    assert layout.sequence_shift == 15
    assert layout.time_shift == 25
    assert layout.has_checksum


def test_zero_width_fields_have_empty_masks() -> None:
    layout = BitLayout(sequence_bits=0, shard_bits=0)

    assert layout.sequence_mask == 0
    assert layout.shard_mask == 0
    assert layout.time_shift == 0


def test_layout_is_frozen() -> None:
    layout = BitLayout()

    with pytest.raises(AttributeError):
        layout.shard_bits = 4  # type: ignore[misc]


def test_equal_layouts_compare_equal() -> None:
    assert BitLayout(10, 6) == BitLayout(sequence_bits=10, shard_bits=6)
    assert hash(BitLayout(10, 6)) == hash(BitLayout(10, 6))


def test_signed_and_unsigned_views() -> None:
    assert to_signed(0xFFFFFFFFFFFFFFFF) == -1
    assert to_signed(0x7FFFFFFFFFFFFFFF) == 0x7FFFFFFFFFFFFFFF
    assert to_unsigned(-1) == 0xFFFFFFFFFFFFFFFF
    assert to_unsigned(to_signed(0x8000000000000001)) == 0x8000000000000001
