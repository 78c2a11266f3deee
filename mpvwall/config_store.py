# mpvwall/config_store.py
#
# Saved per-screen audio routing.
#
# File format, one line per screen in screen order:
#   <token>            use this mpv audio device
#   <token>\t<volume>  ...and start at this volume (0-100)
#
# Routes are bound to screen *position*: line 1 is screen 1, and so on.
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .compat import VOLUME_MIN, VOLUME_MAX
from .logging_setup import _log, _dbg


@dataclass(frozen=True)
class AudioRoute:
    token: str
    volume: Optional[int] = None

    def to_dict(self):
        return {"token": self.token, "volume": self.volume}


def parse_volume(text) -> Optional[int]:
    """
    Integer in [0, 100], or None for anything else.
    """
    try:
        v = int(str(text).strip())
    except (TypeError, ValueError):
        return None
    if VOLUME_MIN <= v <= VOLUME_MAX:
        return v
    return None


def format_routes(routes) -> str:
    lines = []
    for r in routes:
        if r.volume is None:
            lines.append(r.token)
        else:
            lines.append(f"{r.token}\t{r.volume}")
    return "".join(line + "\n" for line in lines)


def parse_routes(text: str) -> List[AudioRoute]:
    out = []
    for raw in (text or "").splitlines():
        # Tab separates token and volume, so only the token is trimmed
        if not raw.strip():
            continue
        token, sep, vol_text = raw.partition("\t")
        token = token.strip()
        if not token:
            continue
        volume = parse_volume(vol_text) if sep else None
        out.append(AudioRoute(token=token, volume=volume))
    return out


def _file_mode(path) -> int:
    """
    Permission bits for the replacement file: those of the file being
    replaced, or the umask default for a new one (mkstemp always uses 0600).
    """
    try:
        return os.stat(path).st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


@dataclass(frozen=True)
class RouteStore:
    path: Path

    @property
    def dir_path(self) -> Path:
        return Path(self.path).parent

    def load(self) -> List[AudioRoute]:
        try:
            text = Path(self.path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            _log(f"RouteStore.load: cannot read {self.path}: {e}")
            return []
        routes = parse_routes(text)
        _dbg(f"RouteStore.load: {len(routes)} route(s) from {self.path}")
        return routes

    def save(self, routes) -> bool:
        """
        Replace the file with `routes`. The new content is written to a temp
        file next to the target and renamed over it, so readers only ever see
        the old file or the complete new one.
        """
        data = format_routes(routes)
        tmp_path = None
        try:
            self.dir_path.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix="." + Path(self.path).name + ".", suffix=".tmp", dir=str(self.dir_path)
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _file_mode(self.path))
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            _log(f"RouteStore.save: cannot write {self.path}: {e}")
            return False
        finally:
            if tmp_path is not None:
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass
        _log(f"RouteStore.save: {len(routes)} route(s) -> {self.path}")
        return True
