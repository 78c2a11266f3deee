import os
import stat

import pytest

from mpvwall.context import RuntimeContext, default_config_dir, resolve_player_executable
from mpvwall.screens import count_displays
from screeninfo.common import ScreenInfoError


def _make_exe(path):
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


@pytest.mark.skipif(os.name == "nt", reason="POSIX executable bits")
def test_known_location_wins_over_path_lookup(tmp_path):
    exe = _make_exe(tmp_path / "mpv")
    found = resolve_player_executable(env={}, locations=[str(tmp_path / "missing"), exe],
                                      which=lambda name: "/usr/bin/mpv")
    assert found == exe


@pytest.mark.skipif(os.name == "nt", reason="POSIX executable bits")
def test_non_executable_location_is_ignored(tmp_path):
    plain = tmp_path / "mpv"
    plain.write_text("")
    plain.chmod(0o644)
    found = resolve_player_executable(env={}, locations=[str(plain)], which=lambda name: "/usr/bin/mpv")
    assert found == "/usr/bin/mpv"


def test_falls_back_to_bare_name_when_nothing_found():
    assert resolve_player_executable(env={}, locations=[], which=lambda name: None) == "mpv"


@pytest.mark.skipif(os.name == "nt", reason="POSIX executable bits")
def test_env_override_takes_precedence(tmp_path):
    exe = _make_exe(tmp_path / "my-mpv")
    found = resolve_player_executable(env={"MPVWALL_MPV": exe}, locations=[], which=lambda name: None)
    assert found == exe


def test_config_dir_override(tmp_path):
    assert default_config_dir({"MPVWALL_CONFIG_DIR": str(tmp_path)}) == tmp_path


def test_from_environment_builds_config_path(tmp_path):
    ctx = RuntimeContext.from_environment({"MPVWALL_CONFIG_DIR": str(tmp_path)})
    assert ctx.config_path == tmp_path / "audio_devices.txt"
    assert ctx.stagger == 0.4


def test_with_stagger_clamps_negative(ctx):
    assert ctx.with_stagger(-3).stagger == 0.0
    assert ctx.stagger == 0.0


def test_count_displays_uses_monitor_list():
    assert count_displays(lambda: [object(), object()]) == 2


def test_count_displays_treats_enumeration_error_as_zero():
    def boom():
        raise ScreenInfoError("No enumerators available")

    assert count_displays(boom) == 0
