import locale

import pytest

from mpvwall import logging_setup
from mpvwall.context import RuntimeContext


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path_factory, monkeypatch):
    monkeypatch.setattr(logging_setup, "_HOOKS_INSTALLED", True)
    monkeypatch.setattr(logging_setup, "_DEBUG", False)
    logging_setup.set_log_path(tmp_path_factory.mktemp("log") / "mpvwall.log")
    yield


@pytest.fixture(autouse=True)
def _restore_collation():
    saved = locale.setlocale(locale.LC_COLLATE)
    yield
    locale.setlocale(locale.LC_COLLATE, saved)


@pytest.fixture
def ctx(tmp_path):
    return RuntimeContext(
        mpv_path="/opt/test/mpv",
        config_path=tmp_path / "cfg" / "audio_devices.txt",
        catalog_timeout=2.0,
        stagger=0.0,
    )


@pytest.fixture
def collating_locale():
    """A real (non-"C") collation locale, or skip when none is installed."""
    for name in ("en_US.UTF-8", "en_US.utf8", "fr_FR.UTF-8", "de_DE.UTF-8", "English_United States.1252"):
        try:
            locale.setlocale(locale.LC_COLLATE, name)
        except locale.Error:
            continue
        return name
    pytest.skip("no collating locale installed")
