"""Shard derivation from arbitrary string keys.

Equal keys always land on the same shard without any stored mapping table:
the shard is a fixed slice of the SHA-256 digest of the key.

Usage:
    shard_from_key("customer:1001")                               # 32-bit value
    shard_from_key("customer:1001", HashWindow(width_bits=16, offset=4))
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from flexid.core.errors import ConfigurationError

DIGEST_SIZE = hashlib.sha256().digest_size
WINDOW_WIDTHS = (16, 32)


@dataclass(frozen=True, slots=True)
class HashWindow:
    """Slice of the SHA-256 digest read as a big-endian unsigned int.

    Attributes:
        width_bits: Width of the slice, 16 or 32.
        offset: Byte offset of the slice within the 32-byte digest.
    """

    width_bits: int = 32
    offset: int = 0

    def __post_init__(self) -> None:
        if self.width_bits not in WINDOW_WIDTHS:
            raise ConfigurationError(
                f"width_bits must be one of {WINDOW_WIDTHS}, got {self.width_bits}"
            )
        if not 0 <= self.offset <= DIGEST_SIZE - self.width_bytes:
            raise ConfigurationError(
                f"offset must be between 0 and {DIGEST_SIZE - self.width_bytes} "
                f"for a {self.width_bits}-bit window, got {self.offset}"
            )

    @property
    def width_bytes(self) -> int:
        return self.width_bits // 8

    def read(self, digest: bytes) -> int:
        """Extract the window from a digest."""
        return int.from_bytes(digest[self.offset : self.offset + self.width_bytes], "big")


DEFAULT_WINDOW = HashWindow()


def shard_from_key(text: str | None, window: HashWindow = DEFAULT_WINDOW) -> int:
    """Compute a shard value from a string key.

    The result is not masked to any shard width; encoding an id keeps only
    as many low bits as the layout has shard bits.

    Args:
        text: Key to hash. ``None`` and the empty string map to shard 0.
        window: Which part of the digest to use.

    Returns:
        Unsigned integer of ``window.width_bits`` bits.
    """
    if not text:
        return 0
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return window.read(digest)
