"""Subprocess engine: launch sox, drain both pipes, report the exit code.

Each invocation starts two drainer threads, one per output pipe. Drainers
never touch the sink; they post lines onto a shared FIFO channel and the
calling thread is the only consumer. That keeps sink delivery single
threaded and lets completion be detected by counting end-of-stream markers
instead of polling thread liveness.
"""

import queue
import shlex
import subprocess
import threading
import time
from pathlib import Path
from typing import IO, Optional

from ...errors import SoxCancelledError, SoxLaunchError, SoxTimeoutError
from ..logging_utils import get_logger
from .core import Command
from .sinks import LineSink

log = get_logger(__name__)

# Posted by a drainer after its last line.
_END_OF_STREAM = object()

# Upper bound on a single blocking wait when a timeout or cancel event has to
# be honoured.
_POLL_INTERVAL = 0.1


class StreamDrainer(threading.Thread):
    """Reads one process stream until EOF, posting each line to a channel.

    A read failure is logged and ends the loop as if the stream had closed.
    The end-of-stream marker is posted in every case.
    """

    def __init__(self, stream: IO[str], tag: str, channel: queue.Queue):
        super().__init__(name=f"sox-{tag.lower()}", daemon=True)
        self.stream = stream
        self.tag = tag
        self.channel = channel

    def run(self) -> None:
        try:
            for line in self.stream:
                self.channel.put(line.rstrip("\n"))
        except (OSError, ValueError) as e:
            log.error("Error reading sox %s stream: %s", self.tag, e)
        finally:
            self.channel.put(_END_OF_STREAM)


class ProcessRunner:
    """Runs sox commands with the binary's directory as working directory."""

    def __init__(self, working_dir: str | Path):
        self.working_dir = str(working_dir)

    def run(
        self,
        command: Command,
        sink: LineSink,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> int:
        """Run a command to completion, feeding its output to sink.

        Lines from stdout and stderr are delivered in per-stream order;
        the two streams interleave arbitrarily. sink.on_complete is called
        once, after both streams reached EOF and the process exited.

        Args:
            command: Argument vector; element 0 is the sox binary.
            sink: Receiver for this invocation's output.
            timeout: Optional limit in seconds for the whole invocation.
            cancel: Optional event; setting it aborts the invocation.

        Returns:
            The process exit code.

        Raises:
            SoxLaunchError: If the process cannot be started.
            SoxTimeoutError: If timeout elapsed. The process is killed.
            SoxCancelledError: If cancel was set. The process is killed.
        """
        log.debug("%s", shlex.join(command))

        try:
            process = subprocess.Popen(
                list(command),
                cwd=self.working_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise SoxLaunchError(e.errno, f"Cannot start sox: {e.strerror}", command[0]) from e

        channel: queue.Queue = queue.Queue()
        drainers = [
            StreamDrainer(process.stderr, "ERROR", channel),
            StreamDrainer(process.stdout, "OUTPUT", channel),
        ]
        for drainer in drainers:
            drainer.start()

        deadline = None if timeout is None else time.monotonic() + timeout

        try:
            open_streams = len(drainers)
            while open_streams:
                _check_abort(timeout, deadline, cancel)
                try:
                    item = channel.get(timeout=_wait_slice(deadline, cancel))
                except queue.Empty:
                    continue
                if item is _END_OF_STREAM:
                    open_streams -= 1
                else:
                    sink.on_line(item)

            exit_code = _wait_for_exit(process, timeout, deadline, cancel)
        except BaseException:
            _kill(process)
            raise
        finally:
            for drainer in drainers:
                drainer.join()
            process.stdout.close()
            process.stderr.close()

        sink.on_complete(exit_code)
        return exit_code


def _wait_slice(deadline: Optional[float], cancel: Optional[threading.Event]) -> Optional[float]:
    """How long one blocking wait may last; None means indefinitely."""
    if deadline is None:
        return None if cancel is None else _POLL_INTERVAL
    remaining = max(deadline - time.monotonic(), 0.0)
    return remaining if cancel is None else min(remaining, _POLL_INTERVAL)


def _check_abort(
    timeout: Optional[float],
    deadline: Optional[float],
    cancel: Optional[threading.Event],
) -> None:
    if cancel is not None and cancel.is_set():
        raise SoxCancelledError("sox invocation cancelled")
    if deadline is not None and time.monotonic() >= deadline:
        raise SoxTimeoutError(f"sox did not finish within {timeout} seconds")


def _wait_for_exit(
    process: subprocess.Popen,
    timeout: Optional[float],
    deadline: Optional[float],
    cancel: Optional[threading.Event],
) -> int:
    while True:
        try:
            return process.wait(timeout=_wait_slice(deadline, cancel))
        except subprocess.TimeoutExpired:
            _check_abort(timeout, deadline, cancel)


def _kill(process: subprocess.Popen) -> None:
    if process.poll() is None:
        log.warning("Killing sox process %d", process.pid)
        process.kill()
    process.wait()
