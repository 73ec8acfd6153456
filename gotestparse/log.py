"""Debug logging functions
"""

import argparse
import logging
import os
import shlex
import sys
from typing import Optional


def calling_program() -> str:
    "Return the name of the program that started us"
    return os.path.basename(sys.argv[0])


def logging_level_to_syslog(level: int) -> int:
    "Converts a logging level into a syslog-compatible one"
    if level <= logging.DEBUG:
        return 7  # KERN_DEBUG
    if level <= logging.INFO:
        return 6  # KERN_INFO
    # Nothing maps to syslog level 5 (KERN_NOTICE)
    if level <= logging.WARNING:
        return 4  # KERN_WARNING
    if level <= logging.ERROR:
        return 3  # KERN_ERR
    if level <= logging.CRITICAL:
        return 2  # KERN_CRIT
    # Custom levels above CRITICAL
    return 1      # KERN_ALERT


class SyslogFormatter(logging.Formatter):
    "Formats log messages with a syslog-style <N> level prefix"

    def __init__(self, fmt: str):
        super().__init__()
        self.base_format = fmt

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        self._style._fmt = f'<{logging_level_to_syslog(record.levelno)}>' + self.base_format
        return super().format(record)


def setup(args: argparse.Namespace, program: Optional[str] = None):
    """Set up the logging subsystem according to the command-line options.

    Logs go to stderr so they don't mix with the parsed results written to stdout.
    program defaults to the program invoking this run.
    """
    if not program:
        program = shlex.quote(calling_program())
    # Escape percents to pass through format()
    program = program.replace('%', '%%')
    if args.debug:
        level = logging.DEBUG
        fmt = program + ' %(levelno)s %(filename)s: %(message)s'
    elif args.verbose:
        level = logging.INFO
        fmt = program + ' %(filename)s: %(message)s'
    else:
        level = logging.WARNING
        fmt = '%(filename)s: %(message)s'
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr)
    if args.level_prefix:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(SyslogFormatter(fmt))
