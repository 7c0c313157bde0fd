"""Splitting of request entries into SQS sized batches."""

from typing import Sequence, TypeVar

T = TypeVar("T")

# DeleteMessageBatch and SendMessageBatch accept at most 10 entries per call
SQS_MAX_BATCH_SIZE = 10


def chunk(items: Sequence[T], max_size: int = SQS_MAX_BATCH_SIZE) -> list[list[T]]:
    """Split items into consecutive chunks of at most ``max_size`` entries.

    Order is preserved and the chunks exactly partition the input: only the
    last chunk may be shorter, and ``n`` items give ``ceil(n / max_size)``
    chunks.

    Args:
        items: Entries to split.
        max_size: Maximum number of entries per chunk.

    Returns:
        List of chunks (empty for empty input).

    Raises:
        ValueError: If max_size is smaller than 1.
    """
    if max_size < 1:
        raise ValueError(f"max_size must be at least 1, got {max_size}")

    items = list(items)
    return [items[start:start + max_size] for start in range(0, len(items), max_size)]
