"""Luhn-style checksum over the sixteen base-16 digits of a 64-bit value.

The check digit lives in the lowest nibble. Nibble ``i`` (counting from the
least significant) is weighted 1 when ``i`` is even and 2 when odd, each
product is folded to ``v // 15 + v % 15``, and a valid value has a weighted
sum divisible by 15.

Catches most single-digit transcription errors and some adjacent transpositions,
which is what matters for ids copied by hand from logs or support tickets.

Usage:
    value = checksum_encode(0x7FFFFFF0)   # 0x7FFFFFF7
    checksum_validate(value)              # True
"""

from __future__ import annotations

from flexid.core.layout import U64_MASK

NIBBLES = 16
MODULUS = 15
_CHECK_MASK = 0xF


def _fold(value: int) -> int:
    return value // MODULUS + value % MODULUS


def luhn16_sum(value: int) -> int:
    """Weighted, folded digit sum over all sixteen nibbles of ``value``."""
    value &= U64_MASK
    total = 0
    for position in range(NIBBLES):
        digit = (value >> (position * 4)) & 0xF
        weight = 2 if position & 1 else 1
        total += _fold(digit * weight)
    return total


def checksum_encode(value: int) -> int:
    """Return ``value`` with its lowest nibble replaced by the check digit.

    Args:
        value: Id whose low four bits are reserved for the checksum. Any bits
            already present there are discarded.

    Returns:
        The same value with a check digit that makes ``checksum_validate``
        return True.
    """
    payload = value & ~_CHECK_MASK
    remainder = luhn16_sum(payload) % MODULUS
    return payload | ((MODULUS - remainder) % MODULUS)


def checksum_validate(value: int) -> bool:
    """Check the digit in the lowest nibble against the rest of ``value``."""
    return luhn16_sum(value) % MODULUS == 0
