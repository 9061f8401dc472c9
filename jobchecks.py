"""
Configuration checks run before a job touches the filesystem.

The checks are plain functions applied in a fixed order; the first one that
returns a reason wins and the job is not started.
"""
from pathlib import Path

from jobdata import DISTRIBUTIONS, JobConfig, ValidJob, split_paths
from scerrors import ConfigurationError
from scplog import logger


def _has_source_path(config: JobConfig):
    if not config.source_path:
        return "No source folder path (check parameter \"source\")"


def _has_destination_path(config: JobConfig):
    if not config.destination_path:
        return "No destination folders path (check parameter \"destination\")"


def _count_is_positive(config: JobConfig):
    if not config.count_copy_files or config.count_copy_files <= 0:
        return "Count of files to copy needs to be bigger than 0 (check parameter \"countcopyfiles\")"


def _batch_size_is_positive(config: JobConfig):
    if not config.batch_size or config.batch_size <= 0:
        return "Count of files to copy in each batch needs to be bigger than 0 (check parameter \"batchsize\")"


def _batch_fits_count(config: JobConfig):
    if config.count_copy_files < config.batch_size:
        return "Parameter \"batchsize\" is bigger than \"countcopyfiles\""


def _source_is_folder(config: JobConfig):
    if not Path(config.source_path).is_dir():
        return f"The source folder path {config.source_path} doesn't exist or is not a directory (check parameter \"source\")"


def _source_has_entries(config: JobConfig):
    try:
        first_entry = next(Path(config.source_path).iterdir(), None)
    except OSError as e:
        return f"Could not list the source folder {config.source_path}: {e}"

    if first_entry is None:
        return f"Not found any files to copy in {config.source_path}"


CHECKS = (
    _has_source_path,
    _has_destination_path,
    _count_is_positive,
    _batch_size_is_positive,
    _batch_fits_count,
    _source_is_folder,
    _source_has_entries,
)


def first_failure(config: JobConfig) -> str | None:
    for check in CHECKS:
        reason = check(config)

        if reason is not None:
            return reason

    return None


def is_valid_folder(path: Path) -> bool:
    if path.is_dir():
        return True

    logger.error(f"The folder path {path} doesn't exist or is not a directory")
    return False


def valid_destinations(destination_path: str | None) -> tuple[Path, ...]:
    return tuple(path for path in map(Path, split_paths(destination_path)) if is_valid_folder(path))


def validate(config: JobConfig) -> ValidJob:
    reason = first_failure(config)

    if reason is None:
        destinations = valid_destinations(config.destination_path)

        if not destinations:
            reason = "No valid destination folders (check parameter \"destination\")"
        elif config.distribution not in DISTRIBUTIONS:
            reason = f"Unknown distribution {config.distribution!r}, expected one of {', '.join(DISTRIBUTIONS)}"

    if reason is not None:
        logger.error(reason)
        raise ConfigurationError(reason)

    logger.info(f"Start to copy {config.count_copy_files} files with step {config.batch_size} "
                f"from {config.source_path} to each of {', '.join(map(str, destinations))}")

    return ValidJob(config=config, source=Path(config.source_path), destinations=destinations)
