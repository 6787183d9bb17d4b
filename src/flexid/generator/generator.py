"""The id generator and codec.

A FlexId packs a millisecond timestamp, a per-millisecond sequence counter,
a shard value, an optional constant and an optional checksum nibble into one
64-bit integer:

    | time | sequence | shard | constant | check |

Time sits in the highest bits, so ids sort by creation time. Any holder of
an id and the layout that produced it can recover every field.

Field values wider than their field are masked, not rejected. Callers that
need validation must do it before encoding; the generator favours throughput
and never raises on field values.

Usage:
    generator = FlexId(epoch=DEFAULT_EPOCH, sequence_bits=10, shard_bits=8)
    new_id = generator.generate(key="customer:1001")
    generator.extract_shard(new_id)
    generator.extract_timestamp(new_id)
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime

from flexid.core.checksum import checksum_encode, checksum_validate
from flexid.core.errors import InvalidArgumentError
from flexid.core.layout import BitLayout, mask_for, to_unsigned
from flexid.core.sharding import DEFAULT_WINDOW, HashWindow, shard_from_key
from flexid.diagnostics.models import LayoutDiagnostic, millis_to_datetime
from flexid.diagnostics.protocol import DiagnosticListener
from flexid.generator.models import UNIX_EPOCH, DecodedId, GeneratorState

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
"""Returns the current Unix time in milliseconds."""


def system_clock() -> int:
    """Current wall-clock time in Unix milliseconds."""
    return time.time_ns() // 1_000_000


class FlexId:
    """Generates and decodes 64-bit ids for one bit layout.

    Args:
        epoch: Reference instant in Unix milliseconds; the time field counts
            from here.
        sequence_bits: Width of the sequence field (0-15).
        shard_bits: Width of the shard field (0-15).
        constant_bits: Width of the constant field (0-15).
        check_bits: 4 to embed a checksum nibble, 0 for none.
        hash_window: Digest slice used when deriving shards from keys.
        state: Initial sequence, shard and constant. The generator takes
            ownership; do not share one state between generators.
        clock: Source of Unix milliseconds (default: system clock).
        listener: Receives the layout diagnostic once, during construction.

    Raises:
        ConfigurationError: If the layout is invalid.
    """

    def __init__(
        self,
        epoch: int = UNIX_EPOCH,
        sequence_bits: int = 8,
        shard_bits: int = 8,
        constant_bits: int = 0,
        check_bits: int = 0,
        *,
        hash_window: HashWindow = DEFAULT_WINDOW,
        state: GeneratorState | None = None,
        clock: Clock | None = None,
        listener: DiagnosticListener | None = None,
    ) -> None:
        self._layout = BitLayout(
            sequence_bits=sequence_bits,
            shard_bits=shard_bits,
            constant_bits=constant_bits,
            check_bits=check_bits,
        )
        self._epoch = epoch
        self._hash_window = hash_window
        self._state = state if state is not None else GeneratorState()
        self._clock = clock or system_clock
        self._lock = threading.Lock()

        diagnostic = LayoutDiagnostic.from_layout(self._layout, epoch)
        logger.info(diagnostic.message())
        if listener is not None:
            listener(diagnostic)

    def __repr__(self) -> str:
        layout = self._layout
        return (
            f"FlexId(epoch={self._epoch}, sequence_bits={layout.sequence_bits}, "
            f"shard_bits={layout.shard_bits}, constant_bits={layout.constant_bits}, "
            f"check_bits={layout.check_bits})"
        )

    # --- Configuration (read-only) ---

    @property
    def layout(self) -> BitLayout:
        return self._layout

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def hash_window(self) -> HashWindow:
        return self._hash_window

    @property
    def sequence(self) -> int:
        """Counter value the next generated id will use (before masking)."""
        with self._lock:
            return self._state.sequence

    @property
    def shard(self) -> int:
        return self._state.shard

    @property
    def constant(self) -> int:
        return self._state.constant

    # --- Encoding ---

    def encode(self, millis: int, sequence: int, shard: int, constant: int = 0) -> int:
        """Pack explicit field values into an id.

        ``millis`` is used as-is; the epoch is not subtracted. Sequence, shard
        and constant are masked to their widths. ``millis`` is not masked: a
        value too large for the time field spills into bit 63 or past bit 64,
        where it is dropped.

        Args:
            millis: Time units since the epoch.
            sequence: Sequence value.
            shard: Shard value.
            constant: Constant value.

        Returns:
            Unsigned 64-bit id, with its checksum nibble set if enabled.
        """
        layout = self._layout
        value = millis << layout.time_shift
        value |= (sequence & layout.sequence_mask) << layout.sequence_shift
        value |= (shard & layout.shard_mask) << layout.shard_shift
        value |= (constant & layout.constant_mask) << layout.constant_shift
        value = to_unsigned(value)
        if layout.has_checksum:
            value = checksum_encode(value)
        return value

    def next_sequence(self) -> int:
        """Atomically read the counter and advance it by one."""
        with self._lock:
            sequence = self._state.sequence
            self._state.sequence = sequence + 1
        return sequence

    def elapsed_millis(self) -> int:
        """Milliseconds between the epoch and now."""
        return self._clock() - self._epoch

    def generate(self, shard: int | None = None, *, key: str | None = None) -> int:
        """Generate an id for the current time and the next sequence value.

        Args:
            shard: Shard for this id (default: the generator's shard).
            key: String key hashed into the shard instead of ``shard``.
                ``key=None`` means no key and falls back to the generator's
                shard. An empty key hashes to shard 0.

        Returns:
            New id.

        Raises:
            InvalidArgumentError: If both ``shard`` and ``key`` are given.
        """
        if shard is not None and key is not None:
            raise InvalidArgumentError("Pass either shard or key, not both")
        if key is not None:
            shard = shard_from_key(key, self._hash_window)
        elif shard is None:
            shard = self._state.shard
        sequence = self.next_sequence()
        return self.encode(self.elapsed_millis(), sequence, shard, self._state.constant)

    def shard_for(self, key: str | None) -> int:
        """Shard value ``generate(key=...)`` uses for ``key``, masked to the layout."""
        return shard_from_key(key, self._hash_window) & self._layout.shard_mask

    # --- Decoding ---

    def extract_millis(self, value: int) -> int:
        """Time units since the epoch."""
        return to_unsigned(value) >> self._layout.time_shift

    def extract_unix_millis(self, value: int) -> int:
        """Unix milliseconds at which the id was generated."""
        return self.extract_millis(value) + self._epoch

    def extract_timestamp(self, value: int) -> datetime:
        """UTC datetime at which the id was generated.

        Raises:
            InvalidArgumentError: If the instant falls outside the years 1 to
                9999. Use ``extract_unix_millis`` for such ids.
        """
        unix_millis = self.extract_unix_millis(value)
        timestamp = millis_to_datetime(unix_millis)
        if timestamp is None:
            raise InvalidArgumentError(
                f"Id time {unix_millis} ms since 1970 is outside the datetime range"
            )
        return timestamp

    def extract_sequence(self, value: int) -> int:
        layout = self._layout
        return (to_unsigned(value) >> layout.sequence_shift) & layout.sequence_mask

    def extract_shard(self, value: int, bits: int | None = None) -> int:
        """Shard value of an id, optionally only its lowest ``bits`` bits.

        Truncating to fewer bits maps a large logical shard space onto a
        smaller physical one.

        Raises:
            InvalidArgumentError: If ``bits`` is negative or exceeds the
                configured shard width.
        """
        layout = self._layout
        shard = (to_unsigned(value) >> layout.shard_shift) & layout.shard_mask
        if bits is None:
            return shard
        if not 0 <= bits <= layout.shard_bits:
            raise InvalidArgumentError(
                f"bits must be between 0 and the {layout.shard_bits} shard bits of the id, "
                f"got {bits}"
            )
        return shard & mask_for(bits)

    def extract_constant(self, value: int) -> int:
        layout = self._layout
        return (to_unsigned(value) >> layout.constant_shift) & layout.constant_mask

    def decode(self, value: int) -> DecodedId:
        """Extract every field of an id at once.

        Never raises; ``timestamp`` is None when the id's time has no datetime.
        """
        unsigned = to_unsigned(value)
        unix_millis = self.extract_unix_millis(unsigned)
        return DecodedId(
            id=unsigned,
            millis=self.extract_millis(unsigned),
            unix_millis=unix_millis,
            timestamp=millis_to_datetime(unix_millis),
            sequence=self.extract_sequence(unsigned),
            shard=self.extract_shard(unsigned),
            constant=self.extract_constant(unsigned),
            checksum_valid=checksum_validate(unsigned) if self._layout.has_checksum else None,
        )

    # --- Static utilities ---

    shard_from_key = staticmethod(shard_from_key)
    checksum_encode = staticmethod(checksum_encode)
    checksum_validate = staticmethod(checksum_validate)
