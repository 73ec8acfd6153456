"""Type definitions of parsed go test results."""

import datetime
import enum
import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


ZERO_DURATION = datetime.timedelta(0)

# Microseconds per unit, used when formatting durations
_MS = 1000
_SECOND = 1000 * _MS
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


class Status(enum.Enum):
    """Outcome of a test or of a whole package run."""

    PASS = 'PASS'
    FAIL = 'FAIL'
    SKIP = 'SKIP'

    def __str__(self) -> str:
        return self.value


def _decimal(value: int, digits: int) -> str:
    """Format a fixed-point integer with the given number of fractional digits.

    Trailing zeros (and a trailing decimal point) are removed.
    """
    whole, frac = divmod(value, 10 ** digits)
    if not frac:
        return str(whole)
    return f'{whole}.' + f'{frac:0{digits}d}'.rstrip('0')


def format_duration(d: datetime.timedelta) -> str:
    """Format a duration the way the go tools display them.

    Sub-second durations use the largest unit that keeps the integer part nonzero
    (e.g. 108ms, 250µs), longer ones are shown as hours, minutes and fractional seconds
    (e.g. 1.374s, 2m3.5s, 1h0m0s). Resolution is one microsecond.
    """
    us = d // datetime.timedelta(microseconds=1)
    if us <= 0:
        return '0s'
    if us < _MS:
        return f'{us}µs'
    if us < _SECOND:
        return _decimal(us, 3) + 'ms'

    hours, us = divmod(us, _HOUR)
    minutes, us = divmod(us, _MINUTE)
    seconds = _decimal(us, 6) + 's'
    if hours:
        return f'{hours}h{minutes}m{seconds}'
    if minutes:
        return f'{minutes}m{seconds}'
    return seconds


def status_str(status: Optional[Status]) -> str:
    """Return the serialized form of a status; a test without one yet becomes an empty string."""
    return str(status) if status else ''


@dataclass
class Test:
    """Class to hold the result of a single run of a single test (or subtest)."""
    __test__ = False

    name: str                         # test name; subtests contain a /
    status: Optional[Status] = None   # None until the test's status line is seen
    duration: datetime.timedelta = ZERO_DURATION
    output: list[str] = field(default_factory=list)  # log lines written by the test

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'status': status_str(self.status),
            'duration': format_duration(self.duration),
            'output': list(self.output),
        }


@dataclass
class Failure:
    """A single compiler or build error pointing at a source location."""

    file: str
    row: int
    column: int
    message: str

    def __str__(self) -> str:
        return f'{self.file}:{self.row}:{self.column}: {self.message}'

    def to_dict(self) -> dict[str, Any]:
        return {
            'filename': self.file,
            'row': self.row,
            'column': self.column,
            'message': self.message,
        }


@dataclass
class PackageResult:
    """Outcome of one test run of one package."""

    name: str                      # import path
    status: Status
    duration: datetime.timedelta = ZERO_DURATION
    coverage: float = 0.0          # percentage of statements covered; 0 if not reported
    summary: str = ''              # e.g. [build failed]
    tests: list[Test] = field(default_factory=list)
    errors: list[Failure] = field(default_factory=list)

    def count(self, status: Status) -> int:
        """Return the number of tests in this package with the given status."""
        return len([1 for t in self.tests if t.status == status])

    @property
    def passed(self) -> int:
        return self.count(Status.PASS)

    @property
    def failed(self) -> int:
        return self.count(Status.FAIL)

    @property
    def skipped(self) -> int:
        return self.count(Status.SKIP)

    def to_dict(self) -> dict[str, Any]:
        """Return a dict ready for JSON serialization.

        The errors key is only present if there were build errors.
        """
        d = {
            'name': self.name,
            'status': str(self.status),
            'duration': format_duration(self.duration),
            'coverage': self.coverage,
            'summary': self.summary,
            'tests': [t.to_dict() for t in self.tests],
        }  # type: dict[str, Any]
        if self.errors:
            d['errors'] = [e.to_dict() for e in self.errors]
        return d


PackageResults = list[PackageResult]


def results_to_json(results: Iterable[PackageResult], indent: Optional[int] = None) -> str:
    """Serialize a sequence of package results as a JSON array."""
    return json.dumps([r.to_dict() for r in results], indent=indent, ensure_ascii=False)
