"""Shared fixtures for sox-bridge tests."""

import json
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

# Stand-in for the sox binary. Records its arguments and working directory,
# then prints and exits as the FAKE_SOX_* environment variables say.
FAKE_SOX_SCRIPT = """#!{python}
import json
import os
import sys
import time

log_path = os.environ.get("FAKE_SOX_LOG")
if log_path:
    with open(log_path, "a") as f:
        f.write(json.dumps({{"argv": sys.argv[1:], "cwd": os.getcwd()}}) + "\\n")

sys.stdout.write(os.environ.get("FAKE_SOX_STDOUT", ""))
sys.stdout.flush()
sys.stderr.write(os.environ.get("FAKE_SOX_STDERR", ""))
sys.stderr.flush()
time.sleep(float(os.environ.get("FAKE_SOX_SLEEP", "0")))
sys.exit(int(os.environ.get("FAKE_SOX_EXIT", "0")))
"""


@dataclass
class FakeSox:
    """Handle on an installed fake sox binary."""

    bin_dir: Path
    binary: Path
    log_path: Path
    monkeypatch: pytest.MonkeyPatch

    def calls(self) -> list[dict]:
        if not self.log_path.exists():
            return []
        return [json.loads(line) for line in self.log_path.read_text().splitlines()]

    def set_exit_code(self, code: int) -> None:
        self.monkeypatch.setenv("FAKE_SOX_EXIT", str(code))

    def set_stderr(self, text: str) -> None:
        self.monkeypatch.setenv("FAKE_SOX_STDERR", text)

    def set_stdout(self, text: str) -> None:
        self.monkeypatch.setenv("FAKE_SOX_STDOUT", text)

    def set_sleep(self, seconds: float) -> None:
        self.monkeypatch.setenv("FAKE_SOX_SLEEP", str(seconds))


@pytest.fixture
def fake_sox(tmp_path, monkeypatch):
    """Install a fake sox script into a temporary bin directory.

    The script is written without the executable bit; the controller is
    expected to set it before each invocation.
    """
    if sys.platform == "win32":
        pytest.skip("fake sox script relies on a shebang line")

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    binary = bin_dir / "sox"
    binary.write_text(FAKE_SOX_SCRIPT.format(python=sys.executable))
    binary.chmod(0o644)

    log_path = tmp_path / "sox_calls.jsonl"
    monkeypatch.setenv("FAKE_SOX_LOG", str(log_path))
    for name in ("FAKE_SOX_EXIT", "FAKE_SOX_STDERR", "FAKE_SOX_STDOUT", "FAKE_SOX_SLEEP"):
        monkeypatch.delenv(name, raising=False)

    yield FakeSox(bin_dir=bin_dir, binary=binary, log_path=log_path, monkeypatch=monkeypatch)


@pytest.fixture
def temp_config(tmp_path, monkeypatch):
    """Point the server configuration at a temporary directory."""
    from sox_bridge.server import config

    config_dir = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_FILE", config_dir / "config.json")
    yield config
