# mpvwall.py
# -----------------------------------------------------------------------------
# Script entrypoint for running from a checkout (`python mpvwall.py ...`) or as
# a PyInstaller target. The implementation lives in the `mpvwall` package.
# -----------------------------------------------------------------------------

from mpvwall.cli import main

if __name__ == "__main__":
    import sys
    # Propagate the documented exit code to the calling shell.
    sys.exit(main())
