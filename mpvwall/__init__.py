# mpvwall/__init__.py

# Package-level entrypoint export, so the dispatcher can be invoked
# programmatically (tests, other tools) without going through __main__.py.
from .cli import main

__all__ = ["main"]
