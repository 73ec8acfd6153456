"""Test log."""

import logging
import unittest

from gotestparse import log


class TestLog(unittest.TestCase):
    """Test log."""

    def test_logging_level_to_syslog(self):
        for level, prio in [(logging.DEBUG, 7), (logging.INFO, 6), (logging.WARNING, 4),
                            (logging.ERROR, 3), (logging.CRITICAL, 2), (logging.CRITICAL + 10, 1)]:
            with self.subTest(level):
                self.assertEqual(prio, log.logging_level_to_syslog(level))

    def test_syslog_formatter(self):
        formatter = log.SyslogFormatter('%(message)s')
        record = logging.LogRecord('root', logging.ERROR, __file__, 1, 'broken', None, None)
        self.assertEqual('<3>broken', formatter.format(record))

