# mpvwall/screens.py
#
# Display enumeration. Only the count matters: screen i is whatever mpv
# calls --screen=i.
from screeninfo import get_monitors
from screeninfo.common import ScreenInfoError

from .logging_setup import _log, _dbg


def count_displays(enumerate_monitors=get_monitors) -> int:
    try:
        monitors = enumerate_monitors()
    except ScreenInfoError as e:
        _log(f"count_displays: no displays enumerated: {e}")
        return 0
    _dbg(f"count_displays: {len(monitors)}")
    return len(monitors)
