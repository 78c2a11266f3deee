# mpvwall/media.py
#
# Turns one command-line path into the playlist for one screen.
#
# - A directory becomes its visible video files, sorted naturally
#   ("clip2" before "clip10"), case-insensitively, using the current locale.
# - Anything else is passed through untouched; mpv reports missing files itself.
import locale
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .compat import VIDEO_EXTENSIONS
from .logging_setup import _log, _dbg

_DIGITS_RE = re.compile(r"(\d+)")


def natural_key(name: str):
    """
    Sort key mixing locale collation for text runs with numeric order for digit
    runs. re.split with a capture group alternates text/digits, always starting
    with text, so keys of different names compare position by position.
    """
    parts = _DIGITS_RE.split(name.casefold())
    key = []
    for i, part in enumerate(parts):
        if i % 2:
            key.append((1, int(part)))
        else:
            key.append((0, locale.strxfrm(part)))
    return key


def _sort_key(name: str):
    # Raw name breaks ties between names that collate equal
    return (natural_key(name), name)


def is_video_name(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in VIDEO_EXTENSIONS


@dataclass
class MediaResult:
    """
    Playlist for one screen. error is set when a directory could not be read,
    which is different from a readable directory with no videos in it.
    """
    paths: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def __iter__(self):
        return iter(self.paths)

    def __len__(self):
        return len(self.paths)

    def __getitem__(self, idx):
        return self.paths[idx]


def expand(path: str) -> MediaResult:
    resolved = os.path.expanduser(path)
    if not os.path.isdir(resolved):
        return MediaResult(paths=[resolved])

    base = os.path.abspath(resolved)
    try:
        with os.scandir(base) as it:
            names = []
            for entry in it:
                if entry.name.startswith("."):
                    continue
                try:
                    if entry.is_dir():
                        continue
                except OSError:
                    continue
                if is_video_name(entry.name):
                    names.append(entry.name)
    except OSError as e:
        _log(f"expand: cannot list {base}: {e}")
        return MediaResult(error=f"cannot list {base}: {e.strerror or e}")

    names.sort(key=_sort_key)
    _dbg(f"expand: {base} -> {len(names)} video file(s)")
    return MediaResult(paths=[os.path.join(base, n) for n in names])
