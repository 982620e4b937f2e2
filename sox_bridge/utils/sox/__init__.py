"""Sox process layer.

This package drives the sox binary as a subprocess:
- Argument vector builders for each sox verb
- Line sinks that consume captured output
- The process runner that drains stdout/stderr concurrently
"""

from .core import (
    SOX_BINARY_NAME,
    Command,
    check_sox,
    ensure_executable,
    format_time_period,
    resolve_sox_binary,
)
from .commands import (
    FADE_CURVES,
    FADED_SUFFIX,
    TRIMMED_SUFFIX,
    MixInput,
    Number,
    build_concat_command,
    build_fade_command,
    build_length_command,
    build_mix_command,
    build_trim_command,
    faded_output_path,
    is_valid_fade_curve,
    trimmed_output_path,
)
from .sinks import (
    LengthParser,
    LineSink,
    LoggingSink,
    RecordingSink,
)
from .runner import (
    ProcessRunner,
    StreamDrainer,
)

__all__ = [
    # Core utilities
    "SOX_BINARY_NAME",
    "Command",
    "check_sox",
    "ensure_executable",
    "format_time_period",
    "resolve_sox_binary",
    # Command builders
    "FADE_CURVES",
    "FADED_SUFFIX",
    "TRIMMED_SUFFIX",
    "MixInput",
    "Number",
    "build_concat_command",
    "build_fade_command",
    "build_length_command",
    "build_mix_command",
    "build_trim_command",
    "faded_output_path",
    "is_valid_fade_curve",
    "trimmed_output_path",
    # Sinks
    "LengthParser",
    "LineSink",
    "LoggingSink",
    "RecordingSink",
    # Runner
    "ProcessRunner",
    "StreamDrainer",
]
