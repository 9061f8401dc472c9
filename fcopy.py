import shutil
from pathlib import Path

from scerrors import CopyError


def copy_to_directory(file: Path, destination: Path) -> Path:
    """Copy a regular file into ``destination`` under its own name, replacing any existing copy."""
    if not file.is_file():
        raise CopyError(file, destination, "not a regular file")

    target = destination / file.name

    if target.is_dir():
        raise CopyError(file, destination, "a directory with that name exists")

    try:
        shutil.copy2(file, target)
    except OSError as e:
        raise CopyError(file, destination, e.strerror or str(e)) from e

    return target
