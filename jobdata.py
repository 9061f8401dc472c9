from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_POOL_SIZE = 1
DEFAULT_GRACE_PERIOD = 5.0

BATCH_DISTRIBUTION = "batch"
JOB_DISTRIBUTION = "job"
DISTRIBUTIONS = (BATCH_DISTRIBUTION, JOB_DISTRIBUTION)

EXIT_OK = 0
EXIT_CONFIGURATION_ERROR = 1
EXIT_INCOMPLETE = 2


def split_paths(paths: str | None) -> list[str]:
    if not paths:
        return []

    return [path.strip() for path in paths.split(",") if path.strip()]


@dataclass (frozen=True)
class JobConfig:
    source_path: str | None
    destination_path: str | None
    count_copy_files: int | None
    batch_size: int | None
    pool_size: int | None = DEFAULT_POOL_SIZE
    grace_period: float = DEFAULT_GRACE_PERIOD
    distribution: str = BATCH_DISTRIBUTION

    def destination_candidates(self) -> list[str]:
        return split_paths(self.destination_path)


@dataclass (frozen=True)
class ValidJob:
    config: JobConfig
    source: Path
    destinations: tuple[Path, ...]


@dataclass (frozen=True)
class Batch:
    index: int
    offset: int
    files: tuple[Path, ...]

    def __len__(self):
        return len(self.files)


@dataclass
class BatchReport:
    batch_index: int
    attempted: int = 0
    copied: int = 0
    failed: int = 0
    copied_to: Counter = field(default_factory=Counter)
    elapsed: float = 0.0


@dataclass
class JobResult:
    reason: str | None = None
    batches: int = 0
    finished: int = 0
    attempted: int = 0
    copied: int = 0
    failed: int = 0
    copied_to: Counter = field(default_factory=Counter)
    destination_counts: dict[Path, int] = field(default_factory=dict)

    @classmethod
    def aborted(cls, reason: str):
        return cls(reason=reason)

    @property
    def pending(self):
        return self.batches - self.finished

    @property
    def ok(self):
        return self.reason is None and self.failed == 0 and self.pending == 0

    @property
    def exit_code(self):
        if self.reason is not None:
            return EXIT_CONFIGURATION_ERROR

        return EXIT_OK if self.ok else EXIT_INCOMPLETE

    def add(self, report: BatchReport):
        self.finished += 1
        self.attempted += report.attempted
        self.copied += report.copied
        self.failed += report.failed
        self.copied_to.update(report.copied_to)
