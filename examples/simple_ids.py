"""Basic FlexId usage example.

Demonstrates:
- Generator construction with a custom epoch
- Generating ids for fixed shards and for string keys
- Decoding every field of an id
"""

import logging

from flexid import DEFAULT_EPOCH, FlexId


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    generator = FlexId(epoch=DEFAULT_EPOCH, sequence_bits=10, shard_bits=8)

    by_shard = [generator.generate(shard) for shard in (1, 2, 3)]
    by_key = [generator.generate(key=f"customer:{n}") for n in (1001, 1002)]

    for new_id in by_shard + by_key:
        decoded = generator.decode(new_id)
        print(
            f"{new_id:>20}  {decoded.timestamp.isoformat()}  "
            f"seq={decoded.sequence:<4} shard={decoded.shard}"
        )

    assert by_shard == sorted(by_shard), "ids from one generator sort by creation"


if __name__ == "__main__":
    main()
