"""Tests for sequence allocation under concurrent generation.

Critical Invariants:
- Concurrent generate() calls never see the same counter value
- No counter value is skipped
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from flexid import FlexId


def test_concurrent_generate_yields_distinct_sequences(fixed_clock) -> None:
    """CRITICAL: 2**k concurrent calls produce 2**k distinct k-bit sequences."""
    generator = FlexId(sequence_bits=10, shard_bits=4, clock=fixed_clock)
    calls = 1 << 10

    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(pool.map(lambda _: generator.generate(), range(calls)))

    sequences = {generator.extract_sequence(new_id) for new_id in ids}
    assert len(sequences) == calls
    assert len(set(ids)) == calls
    assert generator.sequence == calls


def test_next_sequence_has_no_gaps_across_threads() -> None:
    generator = FlexId(sequence_bits=15, shard_bits=0)
    per_thread = 500
    results: list[list[int]] = [[] for _ in range(8)]
    start = threading.Barrier(len(results))

    def worker(slot: list[int]) -> None:
        start.wait()
        for _ in range(per_thread):
            slot.append(generator.next_sequence())

    threads = [threading.Thread(target=worker, args=(slot,)) for slot in results]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    seen = sorted(value for slot in results for value in slot)
    assert seen == list(range(per_thread * len(results)))
    for slot in results:
        assert slot == sorted(slot), "each thread observes increasing values"
