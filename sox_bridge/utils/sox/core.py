"""Core sox utilities: binary resolution, permissions, and time formatting."""

import math
import os
import subprocess
from decimal import ROUND_HALF_EVEN, Decimal
from pathlib import Path

from ...errors import SoxLaunchError
from ..logging_utils import get_logger

log = get_logger(__name__)

SOX_BINARY_NAME = "sox"

# An ordered argument vector; element 0 is the resolved sox binary.
Command = tuple[str, ...]


def resolve_sox_binary(bin_dir: str | Path) -> str:
    """Return the absolute path of the sox binary inside bin_dir.

    The binary is expected to be installed already; nothing is created here.
    """
    return str((Path(bin_dir) / SOX_BINARY_NAME).absolute())


def ensure_executable(binary_path: str) -> None:
    """Mark the sox binary as executable by its owner (mode 0700).

    A binary whose mode cannot be changed (not owned by us, or a symlink to
    a system sox) is still used as long as it is already executable.

    Raises:
        SoxLaunchError: If the file is missing or cannot be made executable.
    """
    try:
        os.chmod(binary_path, 0o700)
    except OSError as e:
        if not os.access(binary_path, os.X_OK):
            raise SoxLaunchError(
                e.errno, f"Cannot prepare sox binary: {e.strerror}", binary_path
            ) from e
        log.warning("Could not chmod %s (%s); using it as is", binary_path, e.strerror)


def check_sox(binary_path: str = SOX_BINARY_NAME) -> bool:
    """Check if sox is installed and runnable."""
    try:
        subprocess.run([binary_path, "--version"], capture_output=True, check=True)
        return True
    except (subprocess.CalledProcessError, OSError):
        return False


def format_time_period(seconds: float) -> str:
    """Format a seconds value as a sox time period string.

    The seconds part keeps at most two fractional digits with trailing zeros
    dropped, e.g. 3.14159 -> "0:0:3.14" and 12.0 -> "0:0:12". Rounding is
    half-even on the exact binary value, so 2.675 gives "0:0:2.67".

    Raises:
        ValueError: If seconds is NaN or infinite.
    """
    if not math.isfinite(seconds):
        raise ValueError(f"Cannot format non-finite time period: {seconds}")

    rounded = Decimal(seconds).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"0:0:{text}"
