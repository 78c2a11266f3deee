# mpvwall/devices.py
#
# Audio device catalog: asks mpv which output devices it can see.
#
# `mpv --audio-device=help` prints something like:
#
#   List of detected audio devices:
#     'auto' (Autoselect device)
#     'coreaudio/AppleUSBAudioEngine:...' (USB PnP Sound Device)
#     'coreaudio/BuiltInSpeakerDevice' (MacBook Pro Speakers)
#
# The quoted part is the token mpv expects back in `--audio-device=<token>`.
# The catalog is queried fresh on every run; mpv does not promise a stable
# order, so an index is only meaningful against the listing it came from.
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional

from .compat import FLAG_LIST_AUDIO_DEVICES
from .logging_setup import _log, _dbg


@dataclass(frozen=True)
class AudioDevice:
    token: str
    description: str

    def to_dict(self):
        return {"token": self.token, "description": self.description}


@dataclass
class CatalogResult:
    """
    Devices reported by mpv, plus the reason when the listing could not be taken.
    An empty result with error=None means mpv ran and reported nothing.
    """
    devices: List[AudioDevice] = field(default_factory=list)
    error: Optional[str] = None

    def __iter__(self):
        return iter(self.devices)

    def __len__(self):
        return len(self.devices)

    def __getitem__(self, idx):
        return self.devices[idx]

    @property
    def ok(self):
        return self.error is None


def extract_token(line: str) -> str:
    """
    Prefer the text inside the first pair of single quotes; otherwise the
    first whitespace-delimited field. Returns "" when neither yields anything.
    """
    s = line.strip()
    start = s.find("'")
    if start != -1:
        end = s.find("'", start + 1)
        if end != -1:
            return s[start + 1:end]
    parts = s.split()
    return parts[0] if parts else ""


def parse_audio_device_output(text: str) -> List[AudioDevice]:
    out = []
    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue
        token = extract_token(line)
        if not token:
            continue
        out.append(AudioDevice(token=token, description=line))
    return out


def _run_capture(argv, timeout):
    return subprocess.run(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
        timeout=timeout,
    )


def list_audio_devices(ctx, run=_run_capture) -> CatalogResult:
    """
    Run the player in device-listing mode and parse what it prints.

    Blocks until mpv exits or ctx.catalog_timeout elapses. A player that cannot
    be started or does not answer in time yields an empty catalog carrying the
    reason; callers treat that as "no devices available".
    """
    argv = [ctx.mpv_path, FLAG_LIST_AUDIO_DEVICES]
    _dbg(f"list_audio_devices: {argv!r} timeout={ctx.catalog_timeout}")
    try:
        p = run(argv, ctx.catalog_timeout)
    except subprocess.TimeoutExpired:
        msg = f"{ctx.mpv_path} did not answer within {ctx.catalog_timeout:g}s"
        _log(f"list_audio_devices: {msg}")
        return CatalogResult(error=msg)
    except OSError as e:
        msg = f"could not start {ctx.mpv_path}: {e}"
        _log(f"list_audio_devices: {msg}")
        return CatalogResult(error=msg)

    devices = parse_audio_device_output(p.stdout or "")
    _dbg(f"list_audio_devices: rc={p.returncode} total={len(devices)}")
    return CatalogResult(devices=devices)
