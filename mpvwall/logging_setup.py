# mpvwall/logging_setup.py
import os
import sys
import traceback
import datetime
import tempfile
import threading

from platformdirs import user_log_dir

from .compat import APP_NAME, ENV_DEBUG

# Debug toggle (runtime)
_TRUTHY = ("1", "true", "yes", "on")


def _env_debug(environ=None) -> bool:
    environ = os.environ if environ is None else environ
    return (environ.get(ENV_DEBUG) or "").strip().lower() in _TRUTHY


_DEBUG = _env_debug()

# Internal state (lazy init: no file I/O at import time)
_LOG_DIR = None
_LOG_PATH = None
_INITIALIZED = False
_HOOKS_INSTALLED = False

LOG_FILENAME = "mpvwall.log"


def set_debug(on: bool = True):
    global _DEBUG
    _DEBUG = bool(on)
    try:
        _log(f"DEBUG {'enabled' if _DEBUG else 'disabled'}")
    except Exception:
        pass


def _resolve_log_path():
    """
    Decide where the log would live, but do not create it yet.
    The per-user log dir is preferred; the temp dir is the fallback.
    """
    try:
        base = user_log_dir(APP_NAME, appauthor=False)
        os.makedirs(base, exist_ok=True)
        # Check writability without creating the real log
        test = os.path.join(base, ".writetest")
        with open(test, "w", encoding="utf-8") as _:
            pass
        os.remove(test)
        return base, os.path.join(base, LOG_FILENAME)
    except Exception:
        tdir = os.path.join(tempfile.gettempdir(), APP_NAME)
        try:
            os.makedirs(tdir, exist_ok=True)
        except Exception:
            tdir = tempfile.gettempdir()
        return tdir, os.path.join(tdir, LOG_FILENAME)


def _ensure_resolved():
    """
    Resolve path variables once.
    """
    global _LOG_DIR, _LOG_PATH
    if _LOG_DIR is None or _LOG_PATH is None:
        _LOG_DIR, _LOG_PATH = _resolve_log_path()


def set_log_path(path):
    """
    Point the log at an explicit file (tests, custom setups).
    Resets lazy init so the next write starts with a fresh breadcrumb.
    """
    global _LOG_DIR, _LOG_PATH, _INITIALIZED
    _LOG_PATH = os.fspath(path)
    _LOG_DIR = os.path.dirname(_LOG_PATH)
    _INITIALIZED = False


def _global_excepthook(exc_type, exc_value, exc_tb):
    _log_exc("UNCAUGHT EXCEPTION", (exc_type, exc_value, exc_tb))
    try:
        sys.__excepthook__(exc_type, exc_value, exc_tb)
    except Exception:
        pass


def _install_hooks_once():
    global _HOOKS_INSTALLED
    if _HOOKS_INSTALLED:
        return
    try:
        sys.excepthook = _global_excepthook
    except Exception:
        pass
    _HOOKS_INSTALLED = True


def _ensure_init():
    """
    Initialize logging on first use (lazy):
    - Resolve and create the log file
    - Write the first breadcrumb
    - Install the exception hook
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    _ensure_resolved()

    try:
        ts = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(_LOG_PATH, "a", encoding="utf-8", errors="replace") as f:
            f.write(f"[{ts}] logging to: {_LOG_PATH}\n")
    except Exception:
        pass

    _install_hooks_once()
    _INITIALIZED = True


def _log_path():
    _ensure_resolved()
    return _LOG_PATH


def _log(msg: str):
    _ensure_init()
    try:
        ts = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(_LOG_PATH, "a", encoding="utf-8", errors="replace") as f:
            f.write(f"[{ts}] {msg}\n")
    except Exception:
        pass


def _log_exc(prefix: str, exc_info=None):
    try:
        if exc_info is None:
            exc_info = sys.exc_info()
        tb = "".join(traceback.format_exception(*exc_info))
        _log(f"{prefix}\n{tb}")
    except Exception:
        pass


def _dbg(msg: str):
    if not _DEBUG:
        return
    try:
        _ensure_init()
        ts = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        tid = threading.get_ident()
        pid = os.getpid()
        with open(_LOG_PATH, "a", encoding="utf-8", errors="replace") as f:
            f.write(f"[{ts}] [DBG pid={pid} tid={tid}] {msg}\n")
    except Exception:
        pass
