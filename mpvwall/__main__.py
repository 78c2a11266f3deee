# mpvwall/__main__.py
# Makes `python -m mpvwall` behave like the installed `mpvwall` script.

from .cli import main

if __name__ == "__main__":
    import sys
    sys.exit(main())
