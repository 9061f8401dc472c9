from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path

from tqdm import tqdm

from batching import list_source, partition
from copytask import CopyFunction, run_batch
from destcleaner import clean_destinations
from fcopy import copy_to_directory
from jobchecks import validate
from jobdata import DEFAULT_GRACE_PERIOD, DEFAULT_POOL_SIZE, Batch, BatchReport, JobConfig, JobResult
from scerrors import ConfigurationError, ShutdownWaitError
from scplog import logger


def count_entries(directory: Path) -> int:
    try:
        return sum(1 for _ in directory.iterdir())
    except OSError as e:
        logger.error(f"Could not list {directory}: {e}")
        return 0


class JobCoordinator:
    """
    Runs one copy job: validate, clean destinations, partition the source and
    copy every batch on a thread pool, then report what landed where.
    """

    def __init__(self, config: JobConfig, copy: CopyFunction = copy_to_directory, progress: bool = False):
        self.config = config
        self.copy = copy
        self.progress = progress

    @property
    def pool_size(self) -> int:
        if self.config.pool_size is None or self.config.pool_size <= 0:
            logger.warning(f"Pool size {self.config.pool_size} is not positive, using {DEFAULT_POOL_SIZE}")
            return DEFAULT_POOL_SIZE

        return self.config.pool_size

    @property
    def grace_period(self) -> float:
        if self.config.grace_period is None or self.config.grace_period <= 0:
            logger.warning(f"Grace period {self.config.grace_period} is not positive, using {DEFAULT_GRACE_PERIOD:g}s")
            return DEFAULT_GRACE_PERIOD

        return self.config.grace_period

    def run(self) -> JobResult:
        try:
            job = validate(self.config)
        except ConfigurationError as e:
            return JobResult.aborted(str(e))

        removed = clean_destinations(job.destinations)
        logger.debug(f"Removed {removed} entries from destination folders")

        try:
            entries = list_source(job.source)
        except OSError as e:
            reason = f"Could not list the source folder {job.source}: {e}"
            logger.error(reason)
            return JobResult.aborted(reason)

        batches = partition(entries, self.config.count_copy_files, self.config.batch_size)
        result = JobResult(batches=len(batches))

        pool_size = self.pool_size
        executor = ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="splitcopy")

        try:
            futures = {
                executor.submit(run_batch, batch, job.destinations, self.copy, self.config.distribution): batch
                for batch in batches
            }
            logger.debug(f"Submitted {len(futures)} batches to {pool_size} worker(s)")
        finally:
            executor.shutdown(wait=False)

        try:
            self._await_drain(futures, result, self.grace_period)
        except ShutdownWaitError as e:
            logger.warning(f"Error while waiting for the copy pool to shut down: {e}")

        logger.info("Copy finished")

        for destination in job.destinations:
            result.destination_counts[destination] = count_entries(destination)
            logger.info(f"Directory {destination.name} has {result.destination_counts[destination]} files")

        return result

    def _await_drain(self, futures: dict[Future, Batch], result: JobResult, grace_period: float):
        finished = as_completed(futures, timeout=grace_period)

        if self.progress:
            finished = tqdm(finished, total=len(futures), desc="Copying batches", unit="batch", ncols=100)

        try:
            for future in finished:
                batch = futures[future]

                try:
                    report = future.result()
                except Exception:
                    logger.exception(f"Batch {batch.index} stopped unexpectedly")
                    report = BatchReport(batch_index=batch.index, attempted=len(batch), failed=len(batch))

                result.add(report)
        except TimeoutError as e:
            raise ShutdownWaitError(len(futures) - result.finished, grace_period) from e
        finally:
            if self.progress:
                finished.close()
