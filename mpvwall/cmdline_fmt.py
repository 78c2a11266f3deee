# mpvwall/cmdline_fmt.py
#
# Formats argv lists into a human-friendly command string.
#
# IMPORTANT:
# - This is for display/logging only (launch log lines, --dry-run output).
# - Do NOT use this to execute subprocesses (always pass argv as a list).
#
import os
import shlex
import subprocess


def format_cmd_for_display(argv) -> str:
    """
    Format an argv list into a command string suitable for display/logging.

    Windows uses subprocess.list2cmdline() (CreateProcess quoting rules);
    everything else uses shlex.join() so the output can be pasted into a shell.
    """
    if argv is None:
        return ""

    args = ["" if a is None else str(a) for a in argv]

    if os.name == "nt":
        return subprocess.list2cmdline(args)
    return shlex.join(args)


def format_mpvwall_cmd_for_display(args) -> str:
    """
    Format an `mpvwall ...` command line for humans to copy/paste
    (used in the `list` hint and error messages).
    """
    return "mpvwall " + format_cmd_for_display(args)
