"""Tests for the Luhn-16 checksum.

Why these tests exist:
- Hand-copied ids must be rejected when a single digit is wrong
- Encoding must always produce a value that validates
- Mismatch is a boolean, never an exception
"""

import random

import pytest

from flexid.core import checksum_encode, checksum_validate
from flexid.core.checksum import luhn16_sum


def test_known_check_digit() -> None:
    assert checksum_encode(0x7FFFFFF0) == 0x7FFFFFF7
    assert checksum_validate(0x7FFFFFF7)


def test_zero_is_valid() -> None:
    assert checksum_encode(0) == 0
    assert checksum_validate(0)


@pytest.mark.parametrize("digit", [d for d in range(16) if d != 7])
def test_every_other_check_digit_fails(digit) -> None:
    """Only one check digit is valid for a given payload."""
    assert not checksum_validate(0x7FFFFFF0 | digit)


def test_encode_discards_existing_low_nibble() -> None:
    assert checksum_encode(0x7FFFFFFA) == 0x7FFFFFF7


def test_encode_then_validate_holds_for_random_values() -> None:
    rng = random.Random(1234)
    for _ in range(500):
        value = rng.getrandbits(64)
        assert checksum_validate(checksum_encode(value))


def test_off_by_one_digit_errors_are_detected() -> None:
    """CRITICAL: bumping any one payload digit by one breaks the checksum."""
    value = checksum_encode(0x0123456789ABCDE0)
    for position in range(1, 16):
        original = (value >> (position * 4)) & 0xF
        replacement = (original + 1) % 15
        corrupted = value & ~(0xF << (position * 4)) | (replacement << (position * 4))
        assert not checksum_validate(corrupted), f"digit {position} change not detected"


def test_adjacent_transposition_is_detected() -> None:
    value = checksum_encode(0x00000000000012A0)
    swapped = checksum_encode(0x0000000000001A20) & ~0xF | (value & 0xF)
    assert not checksum_validate(swapped)


def test_sum_weights_odd_positions_double() -> None:
    # nibble 1 doubled (2), nibble 2 single (1)
    assert luhn16_sum(0x110) == 3
    # 0xF doubled is 30, folded to 2
    assert luhn16_sum(0xF0) == 2
