from pathlib import Path


class SplitCopyError(Exception):
    pass


class ConfigurationError(SplitCopyError):
    pass


class CleanupError(SplitCopyError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not remove {path}: {reason}")
        self.path = path


class CopyError(SplitCopyError):
    def __init__(self, file: Path, destination: Path, reason: str):
        super().__init__(f"Error while {file.name} is copying to {destination}: {reason}")
        self.file = file
        self.destination = destination


class ShutdownWaitError(SplitCopyError):
    def __init__(self, pending: int, grace_period: float):
        super().__init__(f"{pending} batch(es) still running after {grace_period:g}s")
        self.pending = pending
        self.grace_period = grace_period
