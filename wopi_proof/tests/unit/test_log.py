"""Tests for the log line prefix."""
import logging
import os
import re

from wopi_proof.core.log import PROCESS_START, LogPrefixFormatter, configure_logging


def _record(message="hello"):
    return logging.LogRecord("wopi_proof.test", logging.WARNING, __file__, 1, message, None, None)


def test_prefix_fields():
    formatter = LogPrefixFormatter("%(prefix)s %(message)s", start=1000.0)
    record = _record()
    record.created = 1000.0 + 3723.25
    record.thread = 7

    assert formatter.format(record) == f"{os.getpid()},07,01:02:03.250000, hello"


def test_default_format_contains_level_and_name():
    formatter = LogPrefixFormatter()
    line = formatter.format(_record("key missing"))

    assert re.match(r"^\d+,\d{2,},\d{2}:\d{2}:\d{2}\.\d{6}, WARNING wopi_proof\.test: key missing$", line)


def test_elapsed_never_negative():
    formatter = LogPrefixFormatter("%(prefix)s", start=2000.0)
    record = _record()
    record.created = 1999.0
    record.thread = 1
    assert formatter.format(record).endswith(",00:00:00.000000,")


def test_configure_logging_replaces_handler():
    root = logging.getLogger()
    first = configure_logging("DEBUG")
    second = configure_logging("WARNING")

    assert first not in root.handlers
    assert second in root.handlers
    assert isinstance(second.formatter, LogPrefixFormatter)
    assert root.level == logging.WARNING


def test_reconfiguring_keeps_process_start():
    first = configure_logging("INFO")
    second = configure_logging("INFO")

    assert first.formatter.start == PROCESS_START
    assert second.formatter.start == PROCESS_START
