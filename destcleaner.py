from pathlib import Path

from scerrors import CleanupError
from scplog import logger


def remove_entry(entry: Path):
    """
    Remove one direct child of a destination folder.

    Subdirectories get a single rmdir, so a non-empty one is left in place.
    """
    try:
        if entry.is_dir() and not entry.is_symlink():
            entry.rmdir()
        else:
            entry.unlink()
    except OSError as e:
        raise CleanupError(entry, e.strerror or str(e)) from e


def clean_destination(destination: Path) -> int:
    logger.debug(f"Remove files from {destination.absolute()}")

    try:
        entries = list(destination.iterdir())
    except OSError as e:
        logger.error(f"Could not list {destination}: {e}")
        return 0

    removed = 0

    for entry in entries:
        logger.debug(f"Remove file {entry.absolute()}")

        try:
            remove_entry(entry)
            removed += 1
        except CleanupError as e:
            logger.warning(str(e))

    return removed


def clean_destinations(destinations) -> int:
    return sum(clean_destination(destination) for destination in destinations)
