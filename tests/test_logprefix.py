"""Test logprefix."""

import io
import re
import textwrap
import unittest

from gotestparse import logprefix
from gotestparse.logparser import gotestlog

from .util import open_data


class TestLogPrefix(unittest.TestCase):
    """Test logprefix."""

    def test_regexprefixed(self):
        infile = io.StringIO(textwrap.dedent("""\
            12345 First line
            67890 Second line
            Another line
            1 Short
            Final line 999
        """))
        regexprefixed = logprefix.RegexPrefixedLog(infile, re.compile(r'^\d+ '))
        lines = list(iter(regexprefixed.readline, ''))
        self.assertEqual([
            'First line\n',
            'Second line\n',
            'Another line\n',
            'Short\n',
            'Final line 999\n',
        ], lines)

    def test_bytes(self):
        infile = io.BytesIO(b'12345 First line\nSecond line\n')
        regexprefixed = logprefix.RegexPrefixedLog(infile, r'^\d+ ')
        lines = list(iter(regexprefixed.readline, b''))
        self.assertEqual([b'First line\n', b'Second line\n'], lines)

    def test_passthrough(self):
        infile = io.StringIO('line\n')
        regexprefixed = logprefix.RegexPrefixedLog(infile, r'^x')
        self.assertEqual(0, regexprefixed.tell())

    def test_gha(self):
        with open_data('gotest_gha.log') as f:
            results = gotestlog.parse_log_file(
                logprefix.RegexPrefixedLog(f, logprefix.GHA_TIMESTAMP_RE))
        self.assertEqual(1, len(results))
        self.assertEqual('example.com/pkg', results[0].name)
        self.assertEqual(9.6, results[0].coverage)
        self.assertEqual(['TestA'], [t.name for t in results[0].tests])

    def test_gha_unstripped(self):
        # Without removing the timestamps, nothing is recognized
        with open_data('gotest_gha.log') as f:
            self.assertEqual([], gotestlog.parse_log_file(f))
