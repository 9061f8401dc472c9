import time
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from fcopy import copy_to_directory
from jobdata import BATCH_DISTRIBUTION, JOB_DISTRIBUTION, Batch, BatchReport
from scerrors import CopyError
from scplog import logger

CopyFunction = Callable[[Path, Path], object]


def assign(files: Iterable[Path], destinations: Sequence[Path], start: int = 0):
    counter = start

    for file in files:
        yield file, destinations[counter % len(destinations)]
        counter += 1


def start_position(batch: Batch, distribution: str) -> int:
    if distribution == JOB_DISTRIBUTION:
        return batch.offset

    if distribution == BATCH_DISTRIBUTION:
        return 0

    raise ValueError(f"Unknown distribution: {distribution}")


def run_batch(batch: Batch,
              destinations: Sequence[Path],
              copy: CopyFunction = copy_to_directory,
              distribution: str = BATCH_DISTRIBUTION) -> BatchReport:
    """
    Copy the files of one batch, spreading them over ``destinations`` round-robin.

    A failed copy is logged and counted; the rest of the batch still runs.
    """
    report = BatchReport(batch_index=batch.index)

    if not batch.files:
        logger.error(f"Batch {batch.index} has no files to copy")
        return report

    started = time.perf_counter()

    for file, destination in assign(batch.files, destinations, start_position(batch, distribution)):
        report.attempted += 1

        try:
            copy(file, destination)
        except (CopyError, OSError) as e:
            report.failed += 1
            logger.error(f"Error while {file.name} is copying to {destination.absolute()}: {e}")
            continue

        report.copied += 1
        report.copied_to[destination] += 1
        logger.info(f"Copy {file.name} to {destination.absolute()}")

    report.elapsed = time.perf_counter() - started

    for destination in destinations:
        logger.debug(f"Batch {batch.index} put {report.copied_to[destination]} files in {destination}, "
                     f"copy duration {report.elapsed * 1000:.0f} ms")

    return report
