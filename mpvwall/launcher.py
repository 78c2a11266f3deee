# mpvwall/launcher.py
#
# Starts one fullscreen, looping mpv per screen.
#
# Each instance is fire-and-forget: it gets its own session, no pipes, and is
# never waited on. The Popen handle is kept only so the pid can be logged.
import subprocess
import time
from dataclasses import dataclass, field
from typing import List, Optional

from .compat import (
    FLAG_FULLSCREEN, FLAG_LOOP_PLAYLIST, FLAG_NO_TERMINAL, FLAG_NO_OSC, FLAG_NO_CONFIG,
    is_windows,
)
from .cmdline_fmt import format_cmd_for_display
from .logging_setup import _log, _dbg
from .media import expand


@dataclass
class LaunchResult:
    display: int                      # 0-based
    items: int = 0
    pid: Optional[int] = None
    skipped: bool = False
    error: Optional[str] = None
    argv: List[str] = field(default_factory=list)

    @property
    def launched(self):
        return self.pid is not None


def build_player_args(display, media, route=None) -> List[str]:
    args = [
        FLAG_FULLSCREEN,
        f"--screen={display}",
        FLAG_LOOP_PLAYLIST,
        FLAG_NO_TERMINAL,
        FLAG_NO_OSC,
        FLAG_NO_CONFIG,
    ]
    if route is not None:
        args.append(f"--audio-device={route.token}")
        if route.volume is not None:
            args.append(f"--volume={route.volume}")
    args.extend(media)
    return args


def launch_detached(argv) -> subprocess.Popen:
    kwargs = dict(
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        close_fds=True,
    )
    if is_windows():
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True
    return subprocess.Popen(list(argv), **kwargs)


def play(ctx, paths, routes, *, dry_run=False, launch=launch_detached,
         expand_path=expand, sleep=time.sleep, out=None) -> List[LaunchResult]:
    """
    Launch screen i with paths[i], in ascending screen order.

    - A path that expands to nothing skips its screen (no process, no error).
    - routes[i], when present, selects the audio device/volume for screen i.
    - A start failure is recorded on that screen's result and the remaining
      screens still launch.
    - ctx.stagger seconds separate consecutive launches.
    """
    results = []
    pending_sleep = False
    for display, path in enumerate(paths):
        media = expand_path(path)
        if not len(media):
            why = media.error or "no playable files"
            _log(f"[screen {display + 1}] skipped: {path} ({why})")
            results.append(LaunchResult(display=display, skipped=True, error=media.error))
            continue

        route = routes[display] if display < len(routes) else None
        argv = [ctx.mpv_path] + build_player_args(display, list(media), route)
        result = LaunchResult(display=display, items=len(media), argv=argv)
        results.append(result)

        if dry_run:
            if out is not None:
                print(f"# screen {display + 1}", file=out)
                print(format_cmd_for_display(argv), file=out)
            continue

        if pending_sleep:
            sleep(ctx.stagger)

        _dbg(f"[screen {display + 1}] argv: {format_cmd_for_display(argv)}")
        try:
            proc = launch(argv)
        except OSError as e:
            result.error = f"could not start {ctx.mpv_path}: {e}"
            _log(f"[screen {display + 1}] launch failed: {e}")
            pending_sleep = False
            continue

        result.pid = getattr(proc, "pid", None)
        pending_sleep = True
        _log(f"[screen {display + 1}] launched mpv pid={result.pid} with {result.items} item(s)")
        if out is not None:
            print(f"[mpvwall] launching mpv on screen {display + 1} with {result.items} item(s)", file=out)
    return results
