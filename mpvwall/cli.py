# mpvwall/cli.py
import sys
import argparse
import json
import locale

from .compat import (
    EXIT_OK, EXIT_NO_DEVICES, EXIT_USAGE, EXIT_BAD_INDEX, EXIT_BAD_VOLUME,
    EXIT_WRITE_FAILED, EXIT_COUNT_MISMATCH, EXIT_LAUNCH_FAILED, EXIT_INTERRUPTED,
    EXIT_CODES, VOLUME_MIN, VOLUME_MAX,
)
from .cmdline_fmt import format_mpvwall_cmd_for_display
from .config_store import AudioRoute, RouteStore
from .context import RuntimeContext
from .devices import list_audio_devices
from .launcher import play, launch_detached
from .logging_setup import _log, _log_path, set_debug
from .screens import count_displays

SUBCOMMANDS = ("list", "setaudio", "routes")

SETAUDIO_HINT = (
    "Usage: mpvwall setaudio <index[,volume]> [<index[,volume]> ...]\n"
    "  one argument per screen, in screen order; index from `mpvwall list`, volume 0-100"
)


class SelectionError(ValueError):
    def __init__(self, exit_code, message):
        super().__init__(message)
        self.exit_code = exit_code


def parse_selection(text, device_count):
    """
    Parse one setaudio argument, `index` or `index,volume`, against a catalog
    of `device_count` entries. Returns (index, volume-or-None).
    """
    idx_text, sep, vol_text = text.partition(",")
    try:
        index = int(idx_text.strip())
    except ValueError:
        raise SelectionError(EXIT_BAD_INDEX, f"invalid device index {idx_text!r} in {text!r}") from None
    if index < 0 or index >= device_count:
        raise SelectionError(
            EXIT_BAD_INDEX,
            f"device index {index} in {text!r} out of range (0..{device_count - 1})",
        )

    if not sep:
        return index, None
    try:
        volume = int(vol_text.strip())
    except ValueError:
        raise SelectionError(EXIT_BAD_VOLUME, f"invalid volume {vol_text!r} in {text!r}") from None
    if volume < VOLUME_MIN or volume > VOLUME_MAX:
        raise SelectionError(
            EXIT_BAD_VOLUME,
            f"volume {volume} in {text!r} out of range ({VOLUME_MIN}..{VOLUME_MAX})",
        )
    return index, volume


def _report_no_devices(catalog):
    print("ERROR: no audio devices reported by mpv", file=sys.stderr)
    if catalog.error:
        print(f"       ({catalog.error})", file=sys.stderr)


def cmd_list(args, ctx):
    catalog = list_audio_devices(ctx)
    if not len(catalog):
        _report_no_devices(catalog)
        return EXIT_NO_DEVICES

    if args.json:
        print(json.dumps({
            "devices": [dict(index=i, **d.to_dict()) for i, d in enumerate(catalog)],
            "configPath": str(ctx.config_path),
        }, indent=2))
        return EXIT_OK

    print("--- Audio devices (mpv) ---")
    for i, d in enumerate(catalog):
        print(f"[{i}] {d.description}")
    print()
    print(f"Config: {ctx.config_path}")
    print(SETAUDIO_HINT)
    print("Example: " + format_mpvwall_cmd_for_display(["setaudio", "1,75", "0"]))
    return EXIT_OK


def cmd_setaudio(args, ctx):
    catalog = list_audio_devices(ctx)
    if not len(catalog):
        _report_no_devices(catalog)
        return EXIT_NO_DEVICES

    if not args.selections:
        print("ERROR: setaudio needs at least one device index", file=sys.stderr)
        print(SETAUDIO_HINT, file=sys.stderr)
        return EXIT_USAGE

    # Validate everything before touching the file
    routes = []
    for text in args.selections:
        try:
            index, volume = parse_selection(text, len(catalog))
        except SelectionError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return e.exit_code
        routes.append(AudioRoute(token=catalog[index].token, volume=volume))

    store = RouteStore(ctx.config_path)
    if not store.save(routes):
        print(f"ERROR: failed to write {ctx.config_path}", file=sys.stderr)
        return EXIT_WRITE_FAILED

    if args.json:
        print(json.dumps({"saved": [r.to_dict() for r in routes], "configPath": str(ctx.config_path)}))
        return EXIT_OK

    for screen, r in enumerate(routes, 1):
        vol = f" volume={r.volume}" if r.volume is not None else ""
        print(f"screen {screen}: {r.token}{vol}")
    print(f"Saved {len(routes)} audio route(s) to {ctx.config_path}")
    return EXIT_OK


def cmd_routes(args, ctx):
    routes = RouteStore(ctx.config_path).load()
    if args.json:
        print(json.dumps({"routes": [r.to_dict() for r in routes], "configPath": str(ctx.config_path)}, indent=2))
        return EXIT_OK

    if not routes:
        print(f"No audio routes saved ({ctx.config_path}); mpv picks its default device.")
        return EXIT_OK
    for screen, r in enumerate(routes, 1):
        vol = f" volume={r.volume}" if r.volume is not None else ""
        print(f"screen {screen}: {r.token}{vol}")
    print(f"Config: {ctx.config_path}")
    return EXIT_OK


def cmd_play(args, ctx):
    paths = args.paths
    displays = count_displays()
    if len(paths) != displays:
        print(
            f"ERROR: number of paths ({len(paths)}) does not match number of screens ({displays})",
            file=sys.stderr,
        )
        return EXIT_COUNT_MISMATCH

    if args.stagger is not None:
        ctx = ctx.with_stagger(args.stagger)

    routes = RouteStore(ctx.config_path).load()
    results = play(ctx, paths, routes, dry_run=args.dry_run, launch=launch_detached, out=sys.stdout)

    failed = [r for r in results if r.error and not r.skipped]
    for r in results:
        if r.skipped:
            why = r.error or "no playable files"
            print(f"[mpvwall] screen {r.display + 1}: nothing to play ({why}), skipped", file=sys.stderr)
    for r in failed:
        print(f"ERROR: screen {r.display + 1}: {r.error}", file=sys.stderr)
    return EXIT_LAUNCH_FAILED if failed else EXIT_OK


def _exit_code_epilog():
    lines = ["exit codes:"]
    for code, text in sorted(EXIT_CODES.items()):
        lines.append(f"  {code:>3}  {text}")
    return "\n".join(lines)


def _common_parser(default=False):
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--debug", action="store_true", default=default,
                   help="Write debug details to the log file")
    return p


def build_parser():
    # Subparsers must not reset a --debug given before the subcommand
    common = _common_parser(default=argparse.SUPPRESS)
    p = argparse.ArgumentParser(
        prog="mpvwall",
        description="Per-screen audio setup for mpv video walls",
        epilog=_exit_code_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[_common_parser()],
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list", help="List audio devices mpv can see", parents=[common])
    p_list.add_argument("--json", action="store_true")
    p_list.set_defaults(func=cmd_list)

    p_sa = sub.add_parser("setaudio", help="Save one audio device (and optional volume) per screen",
                          parents=[common])
    p_sa.add_argument("selections", nargs="*", metavar="INDEX[,VOLUME]",
                      help="Device index from `list`, optionally followed by ,volume (0-100)")
    p_sa.add_argument("--json", action="store_true")
    p_sa.set_defaults(func=cmd_setaudio)

    p_rt = sub.add_parser("routes", help="Show the saved per-screen audio routes", parents=[common])
    p_rt.add_argument("--json", action="store_true")
    p_rt.set_defaults(func=cmd_routes)

    return p


def build_play_parser():
    p = argparse.ArgumentParser(
        prog="mpvwall",
        usage="mpvwall [--dry-run] [--stagger SECONDS] PATH [PATH ...]\n"
              "       mpvwall {list,setaudio,routes} ...",
        description="Play one path per screen with mpv: fullscreen, looping, "
                    "using the audio routes saved by `mpvwall setaudio`. "
                    "A directory path plays its video files in natural order.",
        epilog=_exit_code_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[_common_parser()],
    )
    p.add_argument("paths", nargs="*", metavar="PATH", help="File or directory, one per screen, in screen order")
    p.add_argument("--dry-run", action="store_true", help="Print the mpv command lines instead of launching")
    p.add_argument("--stagger", type=float, metavar="SECONDS",
                   help="Delay between launches (default: 0.4)")
    p.set_defaults(func=cmd_play, cmd="play")
    return p


def _first_positional(argv):
    for a in argv:
        if a == "--debug":
            continue
        return a
    return None


def _use_user_collation():
    # Playlist sorting collates with LC_COLLATE, which stays "C" until set
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        _log(f"locale: keeping LC_COLLATE={locale.setlocale(locale.LC_COLLATE)!r}: {e}")


def main(argv=None, ctx=None):
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    if _first_positional(argv) in SUBCOMMANDS:
        parser = build_parser()
    else:
        parser = build_play_parser()
        if not argv:
            parser.print_help(sys.stderr)
            return EXIT_USAGE

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 0 for --help and 2 for usage errors
        return e.code if isinstance(e.code, int) else EXIT_USAGE

    if args.debug:
        set_debug(True)

    _use_user_collation()
    if ctx is None:
        ctx = RuntimeContext.from_environment()
    _log(f"mpvwall {args.cmd}: argv={argv!r} log={_log_path()}")

    try:
        rc = args.func(args, ctx)
    except KeyboardInterrupt:
        rc = EXIT_INTERRUPTED
    _log(f"mpvwall {args.cmd}: exit {rc}")
    return rc
