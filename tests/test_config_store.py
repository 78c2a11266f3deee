import os
import stat

import pytest

from mpvwall import config_store
from mpvwall.config_store import AudioRoute, RouteStore, format_routes, parse_routes, parse_volume


def test_save_then_load_round_trips(tmp_path):
    store = RouteStore(tmp_path / "nested" / "dir" / "audio_devices.txt")
    routes = [
        AudioRoute("coreaudio/HDMI", 75),
        AudioRoute("auto"),
        AudioRoute("coreaudio/USB PnP Sound Device", 0),
    ]
    assert store.save(routes) is True
    assert store.load() == routes


def test_file_format_omits_missing_volume(tmp_path):
    store = RouteStore(tmp_path / "audio_devices.txt")
    store.save([AudioRoute("auto"), AudioRoute("coreaudio/HDMI", 100)])
    assert (tmp_path / "audio_devices.txt").read_text(encoding="utf-8") == "auto\ncoreaudio/HDMI\t100\n"


def test_save_overwrites_whole_file_and_leaves_no_temp_files(tmp_path):
    path = tmp_path / "audio_devices.txt"
    store = RouteStore(path)
    store.save([AudioRoute("a"), AudioRoute("b"), AudioRoute("c")])
    store.save([AudioRoute("z", 5)])
    assert store.load() == [AudioRoute("z", 5)]
    assert os.listdir(tmp_path) == ["audio_devices.txt"]


def test_save_failure_returns_false_and_keeps_old_file(tmp_path, monkeypatch):
    path = tmp_path / "audio_devices.txt"
    store = RouteStore(path)
    store.save([AudioRoute("old")])

    def fail_replace(src, dst):
        raise PermissionError(13, "Permission denied", dst)

    monkeypatch.setattr(config_store.os, "replace", fail_replace)
    assert store.save([AudioRoute("new")]) is False
    assert path.read_text(encoding="utf-8") == "old\n"
    assert os.listdir(tmp_path) == ["audio_devices.txt"]


def test_save_failure_when_directory_cannot_be_created(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    store = RouteStore(blocker / "audio_devices.txt")
    assert store.save([AudioRoute("auto")]) is False


def test_load_missing_file_is_empty(tmp_path):
    assert RouteStore(tmp_path / "absent.txt").load() == []


def test_load_unreadable_path_is_empty(tmp_path):
    # A directory where the file should be cannot be read as text
    (tmp_path / "audio_devices.txt").mkdir()
    assert RouteStore(tmp_path / "audio_devices.txt").load() == []


def test_parse_skips_blank_lines_and_empty_tokens():
    text = "\n  auto  \n\t55\n\n coreaudio/HDMI\t75 \n"
    assert parse_routes(text) == [AudioRoute("auto"), AudioRoute("coreaudio/HDMI", 75)]


def test_parse_drops_invalid_volumes_but_keeps_line():
    text = "a\t101\nb\t-1\nc\tloud\nd\t\ne\t42\textra\n"
    assert parse_routes(text) == [
        AudioRoute("a"),
        AudioRoute("b"),
        AudioRoute("c"),
        AudioRoute("d"),
        AudioRoute("e"),
    ]


def test_parsed_count_never_exceeds_written_lines():
    text = "a\n\nb\t7\n\t9\nc\n"
    assert len(parse_routes(text)) <= len(text.splitlines())


def test_parse_volume_bounds():
    assert parse_volume("0") == 0
    assert parse_volume(" 100 ") == 100
    assert parse_volume("100.0") is None
    assert parse_volume(None) is None


def test_format_routes_is_newline_terminated():
    assert format_routes([]) == ""
    assert format_routes([AudioRoute("x", 3)]) == "x\t3\n"


def test_parse_line_with_only_a_volume_is_dropped():
    assert parse_routes("\t55\n") == []
    assert parse_routes("  \t55\nauto\t\t\n") == [AudioRoute("auto")]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_save_keeps_existing_file_mode(tmp_path):
    path = tmp_path / "audio_devices.txt"
    path.write_text("old\n")
    path.chmod(0o640)
    assert RouteStore(path).save([AudioRoute("auto")]) is True
    assert stat.S_IMODE(path.stat().st_mode) == 0o640


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_new_file_gets_umask_default_mode(tmp_path):
    old = os.umask(0o022)
    try:
        path = tmp_path / "audio_devices.txt"
        assert RouteStore(path).save([AudioRoute("auto")]) is True
    finally:
        os.umask(old)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644
