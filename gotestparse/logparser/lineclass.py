"""Classifies single lines of go test output.

Every line is matched against a fixed table of patterns in priority order and the first match
wins. Lines matching nothing (banners, benchmark results, build failure headers, bare
PASS/FAIL lines, etc.) are classified as UNRECOGNIZED, which is never an error.
"""

import enum
import re
from dataclasses import dataclass, field
from typing import Optional


class LineKind(enum.Enum):
    """Category of a go test output line."""

    TEST_START = 'test start'
    PACKAGE_RESULT = 'package result'
    TEST_STATUS = 'test status'
    COVERAGE = 'coverage'
    OUTPUT = 'output'
    FAILURE = 'failure'
    UNRECOGNIZED = 'unrecognized'


# Start of a test or subtest
TEST_START_RE = re.compile(r'^=== RUN\s+(?P<name>.*\S)\s*$')

# Final line for a package; either a run time or a failure marker instead of a time
# e.g. "ok  	example.com/pkg	0.108s	coverage: 9.6% of statements"
#      "FAIL	example.com/pkg [build failed]"
# The duration only needs to start like a number so that a garbled one is reported rather than
# skipped, while prose such as "ok  this works" is not taken for a result
PACKAGE_RESULT_RE = re.compile(
    r'^(?P<verdict>ok|FAIL)\s+(?P<path>\S+)\s+'
    r'(?:(?P<duration>[\d.][^\s\[\]()]*?)s|(?P<marker>\[\w+ failed\]))'
    r'(?:\s+coverage:\s+(?P<coverage>\S+?)%\s+of\s+statements(?:\s+in\s+.+)?)?\s*$')

# Result of a single test, indented for subtests
# Old versions of go test show "(0.07 seconds)" instead of "(0.07s)"
TEST_STATUS_RE = re.compile(
    r'^\s*--- (?P<verdict>PASS|FAIL|SKIP): (?P<name>.+) '
    r'\((?P<duration>[\d.][^\s()]*?)(?:s| seconds)\)\s*$')

# Coverage summary on a line of its own
COVERAGE_RE = re.compile(r'^coverage:\s+(?P<coverage>\S+?)%\s+of\s+statements(?:\s+in\s+.+)?\s*$')

# Log output from a test, indented by 4 spaces per subtest level then a tab
OUTPUT_RE = re.compile(r'^(?:    )*\t(?P<content>.*)$')

# Compiler error
# e.g. "./pkg_test.go:7:2: imported and not used: "foo""
FAILURE_RE = re.compile(r'^(?P<file>\S*?):(?P<row>\d+):(?P<column>\d+):\s*(?P<message>.*)$')

# All patterns in the order in which they must be tried
PATTERNS = (
    (LineKind.TEST_START, TEST_START_RE),
    (LineKind.PACKAGE_RESULT, PACKAGE_RESULT_RE),
    (LineKind.TEST_STATUS, TEST_STATUS_RE),
    (LineKind.COVERAGE, COVERAGE_RE),
    (LineKind.OUTPUT, OUTPUT_RE),
    (LineKind.FAILURE, FAILURE_RE),
)

LinePatterns = tuple[tuple[LineKind, re.Pattern], ...]


@dataclass(frozen=True)
class ClassifiedLine:
    """A line's category along with the fields captured from it."""

    kind: LineKind
    fields: dict[str, Optional[str]] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Optional[str]:
        return self.fields[name]


UNRECOGNIZED_LINE = ClassifiedLine(LineKind.UNRECOGNIZED)


def classify_line(line: str, patterns: LinePatterns = PATTERNS) -> ClassifiedLine:
    """Return the category of the line with its captured fields.

    The line should not include its line terminator.
    """
    for kind, regex in patterns:
        if r := regex.search(line):
            return ClassifiedLine(kind, r.groupdict())
    return UNRECOGNIZED_LINE
