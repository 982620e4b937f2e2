"""Audio tools - length, trimming, fading, mixing and concatenation via sox."""

from pathlib import Path
from typing import Optional

from ...errors import SoxLaunchError
from ...tools.audio import SoxController
from ...utils.sox import check_sox, ensure_executable, format_time_period
from ..config import (
    DEFAULT_BIN_DIR,
    _load_config,
    _save_config,
    get_bin_dir,
    get_timeout,
    to_dict,
)

_controller: Optional[SoxController] = None


def get_controller() -> SoxController:
    """Return the process-wide controller, creating it from config on first use."""
    global _controller
    if _controller is None:
        _controller = SoxController(get_bin_dir(), timeout=get_timeout())
    return _controller


def reset_controller() -> None:
    """Forget the current controller so the next call re-reads config."""
    global _controller
    _controller = None


def register_audio_tools(mcp):
    """Register sox audio tools with the MCP server."""

    # ========== Binary & Config ==========

    @mcp.tool()
    def check_sox_available() -> dict:
        """Check if the configured sox binary runs."""
        controller = get_controller()
        try:
            ensure_executable(controller.sox_bin)
        except SoxLaunchError:
            return {"available": False, "sox_bin": controller.sox_bin}
        available = check_sox(controller.sox_bin)
        return {
            "available": available,
            "sox_bin": controller.sox_bin,
        }

    @mcp.tool()
    def set_bin_directory(directory: str) -> dict:
        """Set the directory holding the sox binary.

        Args:
            directory: Path or "default" to reset to ~/.local/share/sox-bridge/bin.
        """
        if directory.lower() == "default":
            bin_dir = DEFAULT_BIN_DIR
        else:
            bin_dir = Path(directory).expanduser().resolve()

        config = _load_config()
        config["bin_directory"] = str(bin_dir)
        _save_config(config)
        reset_controller()

        return {"status": "success", "bin_directory": str(bin_dir), "exists": bin_dir.exists()}

    @mcp.tool()
    def get_bin_directory() -> dict:
        """Get the directory holding the sox binary."""
        bin_dir = get_bin_dir()
        return {
            "bin_directory": str(bin_dir),
            "exists": bin_dir.exists(),
            "is_default": str(bin_dir) == str(DEFAULT_BIN_DIR),
        }

    # ========== Inspection ==========

    @mcp.tool()
    def get_audio_length(audio_path: str) -> dict:
        """Get audio length in seconds (sox stat). Also returns sox's exit code."""
        return to_dict(get_controller().get_length(audio_path))

    @mcp.tool()
    def format_time(seconds: float) -> dict:
        """Format seconds as a sox time period (0:0:<seconds>)."""
        try:
            formatted = format_time_period(seconds)
        except ValueError as e:
            return {"status": "error", "seconds": seconds, "message": str(e)}
        return {"seconds": seconds, "formatted": formatted}

    # ========== Editing ==========

    @mcp.tool()
    def trim_audio(
        audio_path: str,
        start: str,
        length: Optional[str] = None,
    ) -> dict:
        """Trim audio to [start, start + length], writing <path>_trimmed.wav.

        Args:
            audio_path: Input audio file.
            start: Start position (seconds or sox time spec).
            length: Optional length to keep; omitted keeps the rest.
        """
        return to_dict(get_controller().trim(audio_path, start, length))

    @mcp.tool()
    def fade_audio(
        audio_path: str,
        curve: str,
        fade_in_length: str,
        stop_time: Optional[str] = None,
        fade_out_length: Optional[str] = None,
    ) -> dict:
        """Fade audio in/out, writing <path>_faded.wav.

        Args:
            audio_path: Input audio file.
            curve: q (quarter sine), h (half sine), t (linear), l (logarithmic),
                p (inverted parabola).
            fade_in_length: Fade-in length; "0" for none.
            stop_time: Optional position where the audio stops.
            fade_out_length: Optional fade-out length.
        """
        return to_dict(
            get_controller().fade(audio_path, curve, fade_in_length, stop_time, fade_out_length)
        )

    # ========== Combining ==========

    @mcp.tool()
    def mix_audio(
        input_paths: list[str],
        output_path: str,
        volumes: Optional[list[float]] = None,
    ) -> dict:
        """Mix files so they play simultaneously.

        Args:
            input_paths: Files to mix.
            output_path: Destination file.
            volumes: Optional gain per file (1.0 = original).
        """
        return to_dict(get_controller().mix(input_paths, output_path, volumes))

    @mcp.tool()
    def concatenate_audio(input_paths: list[str], output_path: str) -> dict:
        """Join files end to end."""
        return to_dict(get_controller().concatenate(input_paths, output_path))
