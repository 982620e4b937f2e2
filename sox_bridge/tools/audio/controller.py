"""Operation façade over the sox process layer.

One method per sox verb. Each builds a fresh command and sink, runs the
invocation to completion, and turns the exit code into a result value.
Non-zero exit codes and invalid arguments come back as error results so
batch callers can carry on with other files; launch failures, timeouts and
cancellation are raised.
"""

import threading
from pathlib import Path
from typing import Optional, Sequence

from ...utils.logging_utils import get_logger
from ...utils.sox import (
    FADE_CURVES,
    Command,
    LengthParser,
    LineSink,
    MixInput,
    Number,
    ProcessRunner,
    RecordingSink,
    build_concat_command,
    build_fade_command,
    build_length_command,
    build_mix_command,
    build_trim_command,
    ensure_executable,
    faded_output_path,
    is_valid_fade_curve,
    resolve_sox_binary,
    trimmed_output_path,
)
from .types import LengthResult, OperationResult

log = get_logger(__name__)


class SoxController:
    """Runs sox operations against a binary installed in bin_dir.

    The binary path and its directory are fixed at construction. The binary
    must already exist there; it is made executable before every call.

    Args:
        bin_dir: Directory holding the sox executable. Also the working
            directory of every sox process.
        timeout: Optional per-invocation limit in seconds.
        runner: Process runner to use; defaults to one rooted at bin_dir.
    """

    def __init__(
        self,
        bin_dir: str | Path,
        timeout: Optional[float] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        self.bin_dir = Path(bin_dir).absolute()
        self.sox_bin = resolve_sox_binary(self.bin_dir)
        self.timeout = timeout
        self._runner = runner or ProcessRunner(self.bin_dir)

    def get_length(self, path: str, cancel: Optional[threading.Event] = None) -> LengthResult:
        """Get the length of an audio file in seconds.

        Equivalent to ``sox <path> -n stat`` and reading its Length line.
        The parsed value is returned even when sox exits non-zero.
        """
        parser = LengthParser()
        exit_code = self._exec(build_length_command(self.sox_bin, path), parser, cancel)
        if exit_code != 0:
            log.warning("get_length: sox exited with code %d for %s", exit_code, path)
        return LengthResult(path=path, duration_seconds=parser.length, exit_code=exit_code)

    def trim(
        self,
        path: str,
        start: Number,
        length: Optional[Number] = None,
        cancel: Optional[threading.Event] = None,
    ) -> OperationResult:
        """Keep only the audio from start, for length (default: to the end).

        Writes 16-bit signed-integer audio to ``<absolute path>_trimmed.wav``.
        """
        command = build_trim_command(self.sox_bin, path, start, length)
        return self._run_to_file("trim", command, trimmed_output_path(path), cancel)

    def fade(
        self,
        path: str,
        curve: str,
        fade_in_length: Number,
        stop_time: Optional[Number] = None,
        fade_out_length: Optional[Number] = None,
        cancel: Optional[threading.Event] = None,
    ) -> OperationResult:
        """Apply a fade effect, writing ``<absolute path>_faded.wav``.

        Args:
            path: Input audio file.
            curve: Fade shape, one of q, h, t, l, p.
            fade_in_length: Fade-in length; 0 for no fade in.
            stop_time: Optional position where the audio stops.
            fade_out_length: Optional fade-out length.
        """
        if not is_valid_fade_curve(curve):
            log.error("fade: passed invalid curve type %r", curve)
            return OperationResult(
                operation="fade",
                status="error",
                error=f"Invalid fade curve: {curve!r}. Must be one of {', '.join(FADE_CURVES)}.",
            )

        command = build_fade_command(
            self.sox_bin, path, curve, fade_in_length, stop_time, fade_out_length
        )
        return self._run_to_file("fade", command, faded_output_path(path), cancel)

    def mix(
        self,
        input_files: Sequence[str],
        output_path: str,
        volumes: Optional[Sequence[float]] = None,
        cancel: Optional[threading.Event] = None,
    ) -> OperationResult:
        """Mix input files together (all play at once) into output_path.

        Args:
            input_files: Files to mix.
            output_path: Destination file.
            volumes: Optional gain per input file (1.0 = original). Every
                file is mixed at unit gain when omitted.
        """
        if not input_files:
            return OperationResult(operation="mix", status="error", error="No input files provided")
        if volumes is not None and len(volumes) != len(input_files):
            return OperationResult(
                operation="mix",
                status="error",
                error=f"Got {len(volumes)} volumes for {len(input_files)} input files",
            )

        if volumes is None:
            inputs = [MixInput(path=f) for f in input_files]
        else:
            inputs = [MixInput(path=f, volume=v) for f, v in zip(input_files, volumes)]

        command = build_mix_command(self.sox_bin, inputs, output_path)
        return self._run_to_file("mix", command, output_path, cancel)

    def concatenate(
        self,
        input_files: Sequence[str],
        output_path: str,
        cancel: Optional[threading.Event] = None,
    ) -> OperationResult:
        """Join input files end to end into output_path."""
        if not input_files:
            return OperationResult(
                operation="concatenate", status="error", error="No input files provided"
            )

        command = build_concat_command(self.sox_bin, input_files, output_path)
        return self._run_to_file("concatenate", command, output_path, cancel)

    def _exec(self, command: Command, sink: LineSink, cancel: Optional[threading.Event]) -> int:
        ensure_executable(self.sox_bin)
        return self._runner.run(command, sink, timeout=self.timeout, cancel=cancel)

    def _run_to_file(
        self,
        operation: str,
        command: Command,
        output_path: str,
        cancel: Optional[threading.Event],
    ) -> OperationResult:
        sink = RecordingSink(operation)
        exit_code = self._exec(command, sink, cancel)
        if exit_code != 0:
            log.error("%s received non-zero return code %d", operation, exit_code)
            error = f"sox exited with code {exit_code}"
            if sink.lines:
                error += f": {sink.lines[-1]}"
            return OperationResult(
                operation=operation, status="error", exit_code=exit_code, error=error
            )
        return OperationResult(
            operation=operation, status="success", output_path=output_path, exit_code=exit_code
        )
