"""Value types returned by Pip operations."""

from dataclasses import dataclass
from enum import Enum


class BenignStatus(Enum):
    """Outcome of an operation whose failure never aborts the run."""

    DONE = "done"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True)
class PipOutcome:
    status: BenignStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status != BenignStatus.FAILED


@dataclass(frozen=True)
class InstalledPackage:
    name: str
    version: str
