"""
Process-wide crash reporting.

``install_crash_reporter`` is meant to be called once at program start. It
routes uncaught exceptions through the logging system, and optionally to a
caller supplied sink, before handing them to the previously installed hook.
"""

from typing import Callable, Optional
import logging
import sys
import traceback

logger = logging.getLogger(__name__)

_previous_hook = None


def install_crash_reporter(sink: Optional[Callable[[str], None]] = None) -> bool:
    """
    Install the crash reporting hook.

    Args:
        sink: Optional callable receiving the formatted traceback

    Returns:
        True if the hook was installed, False if one was already in place
    """
    global _previous_hook

    if _previous_hook is not None:
        return False

    previous = sys.excepthook

    def report(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            previous(exc_type, exc_value, exc_tb)
            return

        message = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
        logger.critical(f"Unhandled exception:\n{message}")
        if sink is not None:
            sink(message)
        previous(exc_type, exc_value, exc_tb)

    _previous_hook = previous
    sys.excepthook = report
    logger.debug("Crash reporter installed")
    return True


def uninstall_crash_reporter() -> bool:
    """Restore the hook that was active before installation."""
    global _previous_hook

    if _previous_hook is None:
        return False

    sys.excepthook = _previous_hook
    _previous_hook = None
    return True


def is_crash_reporter_installed() -> bool:
    return _previous_hook is not None
