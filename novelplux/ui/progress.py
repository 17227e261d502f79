"""
Progress Management - Status spinners for long-running network calls.
"""

from contextlib import contextmanager

from rich.status import Status

from novelplux.ui.console import get_console


@contextmanager
def status_spinner(message: str, spinner: str = "dots"):
    """Simple status spinner context manager."""
    status = Status(message, spinner=spinner, console=get_console())

    try:
        status.start()
        yield status
    finally:
        status.stop()


# Export components
__all__ = ["status_spinner"]
