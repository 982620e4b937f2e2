"""Argument vector builders, one per sox verb.

Builders are pure: they never touch the filesystem or spawn processes.
Optional trailing arguments are left out entirely when not supplied.
"""

import os
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .core import Command

TRIMMED_SUFFIX = "_trimmed.wav"
FADED_SUFFIX = "_faded.wav"

# sox fade curve shapes: quarter sine, half sine, linear (triangle),
# logarithmic, inverted parabola.
FADE_CURVES = ("q", "h", "t", "l", "p")

DEFAULT_MIX_VOLUME = 1.0

Number = Union[str, int, float]


@dataclass(frozen=True)
class MixInput:
    """One input to a mix with its gain multiplier."""

    path: str
    volume: float = DEFAULT_MIX_VOLUME


def trimmed_output_path(path: str) -> str:
    return os.path.abspath(path) + TRIMMED_SUFFIX


def faded_output_path(path: str) -> str:
    return os.path.abspath(path) + FADED_SUFFIX


def is_valid_fade_curve(curve: str) -> bool:
    return curve in FADE_CURVES


def build_length_command(sox_bin: str, path: str) -> Command:
    """sox <path> -n stat"""
    return (sox_bin, path, "-n", "stat")


def build_trim_command(
    sox_bin: str,
    path: str,
    start: Number,
    length: Optional[Number] = None,
) -> Command:
    """sox <path> -e signed-integer -b 16 <path>_trimmed.wav trim <start> [<length>]"""
    cmd = [
        sox_bin,
        path,
        "-e",
        "signed-integer",
        "-b",
        "16",
        trimmed_output_path(path),
        "trim",
        str(start),
    ]
    if length is not None:
        cmd.append(str(length))
    return tuple(cmd)


def build_fade_command(
    sox_bin: str,
    path: str,
    curve: str,
    fade_in_length: Number,
    stop_time: Optional[Number] = None,
    fade_out_length: Optional[Number] = None,
) -> Command:
    """sox <path> <path>_faded.wav fade <curve> <fade-in> [<stop>] [<fade-out>]

    Raises:
        ValueError: If curve is not one of FADE_CURVES.
    """
    if not is_valid_fade_curve(curve):
        raise ValueError(f"Invalid fade curve: {curve!r}. Must be one of {', '.join(FADE_CURVES)}.")

    cmd = [sox_bin, path, faded_output_path(path), "fade", curve, str(fade_in_length)]
    if stop_time is not None:
        cmd.append(str(stop_time))
    if fade_out_length is not None:
        cmd.append(str(fade_out_length))
    return tuple(cmd)


def build_mix_command(
    sox_bin: str,
    inputs: Sequence[Union[str, MixInput]],
    output_path: str,
) -> Command:
    """sox -m -v <gain> <file> [-v <gain> <file> ...] <output>

    Plain paths are mixed at unit gain.
    """
    if not inputs:
        raise ValueError("No input files provided")

    cmd = [sox_bin, "-m"]
    for item in inputs:
        if not isinstance(item, MixInput):
            item = MixInput(path=item)
        cmd.extend(["-v", str(float(item.volume)), item.path])
    cmd.append(output_path)
    return tuple(cmd)


def build_concat_command(sox_bin: str, input_files: Sequence[str], output_path: str) -> Command:
    """sox <file> [<file> ...] <output>"""
    if not input_files:
        raise ValueError("No input files provided")

    return (sox_bin, *input_files, output_path)
