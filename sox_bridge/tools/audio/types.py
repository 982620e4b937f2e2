"""Data classes for sox operation results."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class OperationResult:
    """Result of a sox operation that writes an output file.

    output_path is set only when sox exited with code 0.
    """

    operation: str  # "trim", "fade", "mix" or "concatenate"
    status: str  # "success" or "error"
    output_path: Optional[str] = None
    exit_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


@dataclass
class LengthResult:
    """Result of a length query.

    duration_seconds is None when sox printed no parseable Length line.
    It is reported whatever the exit code; callers decide what a non-zero
    exit_code means for them.
    """

    path: str
    duration_seconds: Optional[float]
    exit_code: int

    @property
    def found(self) -> bool:
        return self.duration_seconds is not None
