# mpvwall/compat.py
"""
Platform constants shared by the CLI, the catalog loader and the launcher.
"""
import os
import platform

APP_NAME = "mpvwall"
PLAYER_NAME = "mpv"
CONFIG_FILENAME = "audio_devices.txt"

# Environment overrides
ENV_MPV = "MPVWALL_MPV"
ENV_CONFIG_DIR = "MPVWALL_CONFIG_DIR"
ENV_DEBUG = "MPVWALL_DEBUG"

# Exit codes (one per failure class; keep stable, scripts depend on them)
EXIT_OK = 0
EXIT_NO_DEVICES = 1
EXIT_USAGE = 2
EXIT_BAD_INDEX = 3
EXIT_BAD_VOLUME = 4
EXIT_WRITE_FAILED = 5
EXIT_COUNT_MISMATCH = 6
EXIT_LAUNCH_FAILED = 7
EXIT_INTERRUPTED = 130

EXIT_CODES = {
    EXIT_OK: "success",
    EXIT_NO_DEVICES: "no audio devices reported by mpv",
    EXIT_USAGE: "usage error (missing arguments)",
    EXIT_BAD_INDEX: "invalid device index",
    EXIT_BAD_VOLUME: "invalid volume",
    EXIT_WRITE_FAILED: "could not write the config file",
    EXIT_COUNT_MISMATCH: "number of paths does not match number of screens",
    EXIT_LAUNCH_FAILED: "one or more screens failed to launch",
    EXIT_INTERRUPTED: "interrupted",
}

# Player flags
FLAG_LIST_AUDIO_DEVICES = "--audio-device=help"
FLAG_FULLSCREEN = "--fs"
FLAG_LOOP_PLAYLIST = "--loop-playlist=inf"
FLAG_NO_TERMINAL = "--no-terminal"
FLAG_NO_OSC = "--no-osc"
FLAG_NO_CONFIG = "--no-config"

VOLUME_MIN = 0
VOLUME_MAX = 100

# Seconds between two launches; lets the window manager place each instance
DEFAULT_STAGGER = 0.4
# Seconds to wait for `mpv --audio-device=help`
DEFAULT_CATALOG_TIMEOUT = 10.0

VIDEO_EXTENSIONS = frozenset({
    ".mp4", ".m4v", ".mov", ".mkv", ".webm", ".avi", ".wmv", ".flv",
    ".mpg", ".mpeg", ".ts", ".m2ts", ".mts", ".ogv", ".3gp", ".vob",
})


def known_player_locations():
    """
    Fixed install locations checked before falling back to PATH lookup.
    Homebrew (Apple silicon, Intel), distro packages, snap, and the Windows installer.
    """
    sysname = (platform.system() or "").lower()
    if sysname.startswith("windows"):
        roots = [os.environ.get("ProgramFiles"), os.environ.get("ProgramFiles(x86)")]
        return [os.path.join(r, "mpv", "mpv.exe") for r in roots if r]
    if sysname == "darwin":
        return [
            "/opt/homebrew/bin/mpv",
            "/usr/local/bin/mpv",
            "/Applications/mpv.app/Contents/MacOS/mpv",
        ]
    return [
        "/usr/bin/mpv",
        "/usr/local/bin/mpv",
        "/snap/bin/mpv",
    ]


def is_windows():
    return os.name == "nt"
