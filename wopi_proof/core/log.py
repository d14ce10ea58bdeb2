"""
Logging Setup

Every log line starts with a diagnostic prefix:

    <pid>,<thread>,<HH:MM:SS.uuuuuu>,

where the last field is the time elapsed since the process imported this module.
"""
import logging
import time
from typing import Optional

DEFAULT_FORMAT = "%(prefix)s %(levelname)s %(name)s: %(message)s"

# Elapsed time in every prefix is measured from here
PROCESS_START = time.time()


class LogPrefixFormatter(logging.Formatter):
    """Formatter that provides ``%(prefix)s`` (pid, thread id, elapsed time)."""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, start: Optional[float] = None):
        super().__init__(fmt or DEFAULT_FORMAT, datefmt)
        self.start = PROCESS_START if start is None else start

    def log_prefix(self, record: logging.LogRecord) -> str:
        usec = max(0, int(round((record.created - self.start) * 1_000_000)))
        hours, usec = divmod(usec, 3600 * 1_000_000)
        minutes, usec = divmod(usec, 60 * 1_000_000)
        seconds, usec = divmod(usec, 1_000_000)
        return f"{record.process},{record.thread or 0:02d},{hours:02d}:{minutes:02d}:{seconds:02d}.{usec:06d},"

    def format(self, record: logging.LogRecord) -> str:
        record.prefix = self.log_prefix(record)
        return super().format(record)


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> logging.Handler:
    """
    Install a stderr handler with :class:`LogPrefixFormatter` on the root logger.

    Calling it again replaces the handler installed by the previous call.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, LogPrefixFormatter):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(LogPrefixFormatter(fmt))
    root.addHandler(handler)
    root.setLevel(level.upper())
    return handler
