"""
Logging setup for the scribe command line.

Diagnostics go to stderr through rich so that stdout carries nothing but
the transcript.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

stderr_console = Console(stderr=True)


def configure_logging(level: str = "WARNING", console: Console = None) -> None:
    """
    Route the root logger to a rich handler on stderr.

    Calling it again replaces the handler, so the level can be raised
    once the configuration file has been read.
    """
    handler = RichHandler(
        console=console or stderr_console,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
