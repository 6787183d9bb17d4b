"""Data models for layout diagnostics.

A LayoutDiagnostic summarises what a generator's layout can represent: how
long the time field lasts from the epoch and how many distinct sequence,
shard and constant values fit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from flexid.core.layout import BitLayout

_MILLIS_PER_YEAR = 1000 * 60 * 60 * 24 * 365
UNIX_START = datetime(1970, 1, 1, tzinfo=timezone.utc)


def millis_to_datetime(millis: int) -> datetime | None:
    """Convert Unix milliseconds to an aware UTC datetime without float rounding.

    Returns None for instants outside the years 1 to 9999, which a 64-bit id
    can easily reach.
    """
    try:
        return UNIX_START + timedelta(milliseconds=millis)
    except OverflowError:
        return None


def _isoformat(instant: datetime | None) -> str | None:
    return instant.isoformat() if instant is not None else None


@dataclass(slots=True)
class LayoutDiagnostic:
    """Time range and field cardinalities of a generator layout.

    Attributes:
        epoch: Epoch in Unix milliseconds.
        time_bits: Width of the time field.
        sequence_bits: Width of the sequence field.
        shard_bits: Width of the shard field.
        constant_bits: Width of the constant field.
        check_bits: Width of the checksum field.
        time_range_years: Whole years of positive time values from the epoch.
        start: Instant of the epoch, None if outside the years 1 to 9999.
        end: Instant where the time field runs out, None if outside the
            years 1 to 9999.
        sequences: Distinct sequence values per millisecond.
        shards: Distinct shard values.
        constants: Distinct constant values.
    """

    epoch: int
    time_bits: int
    sequence_bits: int
    shard_bits: int
    constant_bits: int
    check_bits: int
    time_range_years: int
    start: datetime | None
    end: datetime | None
    sequences: int
    shards: int
    constants: int

    @classmethod
    def from_layout(cls, layout: BitLayout, epoch: int) -> LayoutDiagnostic:
        """Describe ``layout`` counted from ``epoch``."""
        millis = layout.time_range_millis
        start = millis_to_datetime(epoch)
        end = millis_to_datetime(epoch + millis)
        return cls(
            epoch=epoch,
            time_bits=layout.time_bits,
            sequence_bits=layout.sequence_bits,
            shard_bits=layout.shard_bits,
            constant_bits=layout.constant_bits,
            check_bits=layout.check_bits,
            time_range_years=millis // _MILLIS_PER_YEAR,
            start=start,
            end=end,
            sequences=1 << layout.sequence_bits,
            shards=1 << layout.shard_bits,
            constants=1 << layout.constant_bits,
        )

    def message(self) -> str:
        """One-line human readable summary."""
        start = _isoformat(self.start) or "outside 0001-9999"
        end = _isoformat(self.end) or "beyond 9999-12-31"
        summary = (
            f"Ids have a time range of {self.time_range_years} years "
            f"({start} to {end}), "
            f"{self.sequences} sequences, {self.shards} shards"
        )
        if self.constant_bits:
            summary += f", {self.constants} constants"
        if self.check_bits:
            summary += ", checksum enabled"
        return summary

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "epoch": self.epoch,
            "time_bits": self.time_bits,
            "sequence_bits": self.sequence_bits,
            "shard_bits": self.shard_bits,
            "constant_bits": self.constant_bits,
            "check_bits": self.check_bits,
            "time_range_years": self.time_range_years,
            "start": _isoformat(self.start),
            "end": _isoformat(self.end),
            "sequences": self.sequences,
            "shards": self.shards,
            "constants": self.constants,
        }
