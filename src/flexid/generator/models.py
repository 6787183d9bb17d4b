"""Generator state and decoded id models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

UNIX_EPOCH = 0
"""1970-01-01T00:00:00Z."""

DEFAULT_EPOCH = 1420070400000
"""2015-01-01T00:00:00Z."""

INSTAGRAM_EPOCH = 1293840000000
"""2011-01-01T00:00:00Z."""


@dataclass(slots=True)
class GeneratorState:
    """Mutable state owned by exactly one generator.

    The sequence counter is the unit of collision avoidance: copying it into
    a second generator with the same layout, epoch and shard produces
    duplicate ids.
    """

    sequence: int = 0
    """Next counter value. Wraps implicitly because encoding masks it."""

    shard: int = 0
    """Shard used when the caller does not supply one."""

    constant: int = 0
    """Constant used by every generated id."""


@dataclass(frozen=True, slots=True)
class DecodedId:
    """Every field of an id, as extracted by its generator's layout."""

    id: int
    millis: int
    unix_millis: int
    timestamp: datetime | None
    """None when the instant falls outside the years 1 to 9999."""
    sequence: int
    shard: int
    constant: int
    checksum_valid: bool | None = None
    """None when the layout carries no checksum."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "id": self.id,
            "hex": f"0x{self.id:016x}",
            "millis": self.millis,
            "unix_millis": self.unix_millis,
            "timestamp": (
                self.timestamp.isoformat() if self.timestamp is not None else None
            ),
            "sequence": self.sequence,
            "shard": self.shard,
            "constant": self.constant,
        }
        if self.checksum_valid is not None:
            result["checksum_valid"] = self.checksum_valid
        return result
