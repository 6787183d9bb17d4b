"""Mapping a large logical shard space onto a few physical nodes.

Ids carry 8 shard bits (256 logical shards). Today only 4 databases exist,
so routing uses the lowest 2 shard bits. Adding nodes later means reading
more bits; ids already issued never change.

Also shows checksummed ids for values that people copy by hand.
"""

from collections import Counter

from flexid import DEFAULT_EPOCH, FlexId, FlexIdBuilder, checksum_validate

NODES = ["db-a", "db-b", "db-c", "db-d"]
NODE_BITS = 2


def route(generator: FlexId, order_id: int) -> str:
    return NODES[generator.extract_shard(order_id, NODE_BITS)]


def main() -> None:
    generator = (
        FlexIdBuilder()
        .with_epoch(DEFAULT_EPOCH)
        .with_sequence_bits(8)
        .with_shard_bits(8)
        .with_check_bits(4)
        .build()
    )

    placement = Counter()
    for customer in range(1000):
        order_id = generator.generate(key=f"customer:{customer}")
        assert checksum_validate(order_id)
        placement[route(generator, order_id)] += 1

    for node in NODES:
        print(f"{node}: {placement[node]} orders")

    typo = generator.generate(key="customer:7") ^ 0x10
    print(f"0x{typo:016x} passes checksum: {checksum_validate(typo)}")


if __name__ == "__main__":
    main()
