"""Tests for shard derivation from string keys.

Critical Invariants:
- Equal keys always map to equal shards
- Missing keys map to shard 0
- Windows never read past the end of the digest
"""

import pytest

from flexid.core import ConfigurationError, HashWindow, shard_from_key

# sha256(b"test") = 9f86d081884c7d65 9a2feaa0c55ad015 a3bf4f1b2b0b822c d15d6c15b0f00a08


def test_shard_is_deterministic() -> None:
    assert shard_from_key("customer:1001") == shard_from_key("customer:1001")


@pytest.mark.parametrize(
    ("window", "expected"),
    [
        (HashWindow(), 0x9F86D081),
        (HashWindow(width_bits=16), 0x9F86),
        (HashWindow(width_bits=16, offset=30), 0x0A08),
        (HashWindow(width_bits=32, offset=28), 0xB0F00A08),
    ],
    ids=["default", "16-bit", "16-bit-tail", "32-bit-tail"],
)
def test_window_selects_digest_slice(window, expected) -> None:
    assert shard_from_key("test", window) == expected


@pytest.mark.parametrize("key", [None, ""])
def test_missing_key_maps_to_zero(key) -> None:
    assert shard_from_key(key) == 0


def test_non_ascii_keys_hash_as_utf8() -> None:
    assert shard_from_key("zürich") != shard_from_key("zurich")
    assert shard_from_key("zürich") == shard_from_key("zürich")


def test_different_keys_usually_differ() -> None:
    shards = {shard_from_key(f"user-{n}") for n in range(100)}
    assert len(shards) > 95


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width_bits": 8},
        {"width_bits": 64},
        {"offset": -1},
        {"width_bits": 32, "offset": 29},
        {"width_bits": 16, "offset": 31},
    ],
    ids=["8-bit", "64-bit", "negative-offset", "32-bit-overrun", "16-bit-overrun"],
)
def test_invalid_window_raises_configuration_error(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        HashWindow(**kwargs)
