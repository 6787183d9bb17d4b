"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from flexid import FlexId

FIXED_NOW = 1_700_000_000_000
"""2023-11-14T22:13:20Z in Unix milliseconds."""


@pytest.fixture
def fixed_now():
    """Unix milliseconds returned by fixed_clock."""
    return FIXED_NOW


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def generator(fixed_clock):
    """Default 8/8 layout, Unix epoch, frozen clock."""
    return FlexId(epoch=0, sequence_bits=8, shard_bits=8, clock=fixed_clock)
