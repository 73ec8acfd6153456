"""Parses go test log files.

The test is expected to have been run with the "-v" option so that test start and status lines
are present, and optionally with "-cover" for the coverage percentage. The logs of any number
of packages may be concatenated in the same file, as is the case when running "go test ./...".

Test results are only returned for packages whose final "ok" or "FAIL" line was seen. Tests and
build errors following the last of those lines are dropped.
"""

import datetime
import io
import logging
import math
import re
from typing import Iterator, Optional

from gotestparse.filedef import TextIOReadline
from gotestparse.logparser import lineclass
from gotestparse.logparser.lineclass import LineKind, LinePatterns
from gotestparse.resultdef import Failure, PackageResult, PackageResults, Status, Test
from gotestparse.resultdef import ZERO_DURATION


# A valid number of seconds
SECONDS_RE = re.compile(r'^(?:\d+(?:\.\d*)?|\.\d+)$')

# Encoding of input given as bytes
INPUT_ENCODING = 'utf-8'


class ParseError(Exception):
    """Base class of errors that abort parsing a log."""


class StreamReadError(ParseError):
    """Raised when the input stream could not be read."""


class DurationParseError(ParseError, ValueError):
    """Raised when a line that must have a duration has one that isn't a valid number.

    Attributes:
        pattern: the kind of line containing the duration
        token: the text that could not be parsed
        lineno: line number in the input, or 0 if not known
    """

    def __init__(self, pattern: LineKind, token: str, lineno: int = 0):
        where = f' on line {lineno}' if lineno else ''
        super().__init__(f'{pattern.value}: unable to parse duration "{token}"{where}')
        self.pattern = pattern
        self.token = token
        self.lineno = lineno


def to_status(verdict: str) -> Status:
    """Convert a test or package verdict into a Status.

    Anything that isn't recognizably a pass or a failure is treated as a skip.
    """
    verdict = verdict.lower()
    if verdict in {'fail', 'failed'}:
        return Status.FAIL
    if verdict in {'ok', 'pass'}:
        return Status.PASS
    return Status.SKIP


def parse_duration(token: str, pattern: LineKind, lineno: int = 0) -> datetime.timedelta:
    """Convert a number of seconds into a duration.

    Raises: DurationParseError if the token isn't a nonnegative decimal number or is too large
    """
    if not SECONDS_RE.search(token):
        raise DurationParseError(pattern, token, lineno)
    try:
        return datetime.timedelta(seconds=float(token))
    except OverflowError as e:
        raise DurationParseError(pattern, token, lineno) from e


def parse_coverage(token: str) -> float:
    """Convert a coverage percentage into a number.

    Unlike durations, an invalid percentage is not an error; it's treated as 0.
    """
    try:
        pct = float(token)
    except ValueError:
        logging.debug('Invalid coverage percentage "%s"; using 0', token)
        return 0.0
    if not math.isfinite(pct) or pct < 0:
        logging.debug('Invalid coverage percentage "%s"; using 0', token)
        return 0.0
    return pct


def iter_lines(f: TextIOReadline) -> Iterator[str]:
    """Return a generator of the lines in the stream, without line terminators.

    Raises: StreamReadError if the stream couldn't be read or decoded
    """
    while True:
        try:
            l = f.readline()
            if isinstance(l, bytes):
                l = l.decode(INPUT_ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(f'unable to read input: {e}') from e
        if not l:
            return
        yield l.rstrip('\r\n')


def find_test(tests: list[Test], name: str) -> Optional[Test]:
    """Return the first test with the given name.

    If a name appears more than once (as with repeated subtest names) only the first one is
    ever found.
    """
    for test in tests:
        if test.name == name:
            return test
    return None


def parse_log_file(f: TextIOReadline,
                   patterns: LinePatterns = lineclass.PATTERNS) -> PackageResults:
    """Parses go test's verbose output.

    Returns: list of results, one for each package result line found, in log order
    Raises: ParseError if the log can't be read or contains an invalid duration; no results
      are returned in that case
    """
    results = []        # type: PackageResults
    current_test = ''   # name of the most recently started test
    tests = []          # type: list[Test]
    failures = []       # type: list[Failure]
    coverage = 0.0

    for lineno, l in enumerate(iter_lines(f), start=1):
        line = lineclass.classify_line(l, patterns)

        if line.kind is LineKind.TEST_START:
            current_test = line['name']
            tests.append(Test(current_test))

        elif line.kind is LineKind.PACKAGE_RESULT:
            if line['marker']:
                duration = ZERO_DURATION
                summary = line['marker']
            else:
                duration = parse_duration(line['duration'], line.kind, lineno)
                summary = ''
            if line['coverage'] is not None:
                # Coverage on the same line takes precedence over a separate coverage line
                coverage = parse_coverage(line['coverage'])

            logging.debug('Found result for package %s with %d tests',
                          line['path'], len(tests))
            results.append(PackageResult(
                name=line['path'],
                status=to_status(line['verdict']),
                duration=duration,
                coverage=coverage,
                summary=summary,
                tests=tests,
                errors=failures))

            # Start again for the next package
            current_test = ''
            tests = []
            failures = []
            coverage = 0.0

        elif line.kind is LineKind.TEST_STATUS:
            duration = parse_duration(line['duration'], line.kind, lineno)
            if test := find_test(tests, line['name']):
                test.status = to_status(line['verdict'])
                test.duration = duration
            else:
                logging.debug('Ignoring status of unknown test %s', line['name'])

        elif line.kind is LineKind.COVERAGE:
            coverage = parse_coverage(line['coverage'])

        elif line.kind is LineKind.OUTPUT:
            if current_test and (test := find_test(tests, current_test)):
                test.output.append(line['content'])

        elif line.kind is LineKind.FAILURE:
            failures.append(Failure(
                line['file'], int(line['row']), int(line['column']), line['message'].strip()))

    if tests or failures:
        logging.debug('Discarding %d tests and %d errors without a package result',
                      len(tests), len(failures))
    if not results:
        logging.debug('No go test package results could be found in the file')
    return results


def parse_log_text(text: str, patterns: LinePatterns = lineclass.PATTERNS) -> PackageResults:
    """Parses go test's verbose output held in a string."""
    return parse_log_file(io.StringIO(text), patterns)
