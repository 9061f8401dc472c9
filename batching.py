import itertools
from pathlib import Path

from jobdata import Batch
from scplog import logger


def list_source(source: Path) -> list[Path]:
    return sorted(source.iterdir())


def partition(entries, count_copy_files: int, batch_size: int) -> list[Batch]:
    """
    Split the first ``count_copy_files`` entries into contiguous batches.

    Every batch holds ``batch_size`` entries except the last one, which takes
    the remainder. Entry order is preserved.

    Args:
        entries: Source entries in enumeration order
        count_copy_files: Upper bound on the number of entries to keep
        batch_size: Number of entries per batch

    Returns:
        List of Batch, ceil(min(len(entries), count_copy_files) / batch_size) long
    """
    if count_copy_files <= 0 or batch_size <= 0:
        raise ValueError(f"count_copy_files and batch_size must be positive, got {count_copy_files} and {batch_size}")

    selected = list(itertools.islice(entries, count_copy_files))
    logger.debug(f"Prepared {len(selected)} files to copy")

    batches = []

    for index, files in enumerate(itertools.batched(selected, batch_size)):
        offset = index * batch_size
        logger.debug(f"Get position from {offset} to {offset + len(files)}")

        batches.append(Batch(index=index, offset=offset, files=files))

    return batches
