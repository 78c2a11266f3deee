# mpvwall/context.py
#
# Runtime context built once at startup and passed to every component.
# Holds the resolved player executable and the config file location, so no
# module reads process-wide state on its own.
import os
import shutil
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from .compat import (
    APP_NAME, PLAYER_NAME, CONFIG_FILENAME,
    ENV_MPV, ENV_CONFIG_DIR,
    DEFAULT_CATALOG_TIMEOUT, DEFAULT_STAGGER,
    known_player_locations,
)
from .logging_setup import _dbg


def _is_executable_file(path) -> bool:
    try:
        return os.path.isfile(path) and os.access(path, os.X_OK)
    except OSError:
        return False


def resolve_player_executable(env=None, locations=None, which=shutil.which) -> str:
    """
    Resolution order:
      1. MPVWALL_MPV, if it names an executable file
      2. the first known install location that is an executable file
      3. PATH lookup by name
    If nothing is found the bare name is returned; starting it then fails with
    the OS error, which callers already handle.
    """
    env = os.environ if env is None else env
    override = (env.get(ENV_MPV) or "").strip()
    if override:
        override = os.path.expanduser(override)
        if _is_executable_file(override):
            return override
        _dbg(f"{ENV_MPV}={override!r} is not an executable file; ignoring")

    for cand in (known_player_locations() if locations is None else locations):
        if _is_executable_file(cand):
            return cand

    found = which(PLAYER_NAME)
    if found:
        return found
    return PLAYER_NAME


def default_config_dir(env=None) -> Path:
    env = os.environ if env is None else env
    override = (env.get(ENV_CONFIG_DIR) or "").strip()
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(APP_NAME, appauthor=False))


@dataclass(frozen=True)
class RuntimeContext:
    mpv_path: str
    config_path: Path
    catalog_timeout: float = DEFAULT_CATALOG_TIMEOUT
    stagger: float = DEFAULT_STAGGER

    @classmethod
    def from_environment(cls, env=None):
        ctx = cls(
            mpv_path=resolve_player_executable(env),
            config_path=default_config_dir(env) / CONFIG_FILENAME,
        )
        _dbg(f"context: mpv={ctx.mpv_path} config={ctx.config_path}")
        return ctx

    def with_stagger(self, seconds):
        return replace(self, stagger=max(0.0, float(seconds)))
