"""Audio operations backed by the sox binary.

These work on files by path and return result data classes.
"""

from .types import (
    LengthResult,
    OperationResult,
)
from .controller import SoxController

__all__ = [
    # Data classes
    "LengthResult",
    "OperationResult",
    # Façade
    "SoxController",
]
