"""Test resultdef."""

import datetime
import json
import unittest

from gotestparse import resultdef
from gotestparse.resultdef import Failure, PackageResult, Status, Test


class TestFormatDuration(unittest.TestCase):
    """Test resultdef.format_duration."""

    def test_format_duration(self):
        for expected, d in [
                ('0s', datetime.timedelta(0)),
                ('1µs', datetime.timedelta(microseconds=1)),
                ('250µs', datetime.timedelta(microseconds=250)),
                ('1.5ms', datetime.timedelta(microseconds=1500)),
                ('70ms', datetime.timedelta(seconds=0.07)),
                ('108ms', datetime.timedelta(seconds=0.108)),
                ('1s', datetime.timedelta(seconds=1)),
                ('1.374s', datetime.timedelta(seconds=1.374)),
                ('59.000001s', datetime.timedelta(seconds=59, microseconds=1)),
                ('2m3.5s', datetime.timedelta(minutes=2, seconds=3.5)),
                ('1h0m0s', datetime.timedelta(hours=1)),
                ('26h3m4s', datetime.timedelta(days=1, hours=2, minutes=3, seconds=4))]:
            with self.subTest(expected):
                self.assertEqual(expected, resultdef.format_duration(d))


class TestSerialization(unittest.TestCase):
    """Test conversion of results to JSON."""

    def setUp(self):
        super().setUp()
        self.maxDiff = 4000

    def test_status(self):
        self.assertEqual(['PASS', 'FAIL', 'SKIP'], [str(s) for s in Status])
        self.assertEqual('', resultdef.status_str(None))

    def test_failure(self):
        failure = Failure('./pkg_test.go', 7, 2, 'imported and not used: "foo"')
        self.assertEqual('./pkg_test.go:7:2: imported and not used: "foo"', str(failure))
        self.assertEqual({
            'filename': './pkg_test.go',
            'row': 7,
            'column': 2,
            'message': 'imported and not used: "foo"',
        }, failure.to_dict())

    def test_test(self):
        self.assertEqual({
            'name': 'TestA/sub',
            'status': '',
            'duration': '0s',
            'output': [],
        }, Test('TestA/sub').to_dict())

    def test_json(self):
        results = [
            PackageResult('example.com/pkg', Status.PASS, datetime.timedelta(seconds=0.108), 9.6,
                          '', [Test('TestA', Status.PASS, datetime.timedelta(seconds=0.07),
                                    ['hello'])]),
            PackageResult('example.com/broken', Status.FAIL, summary='[build failed]',
                          errors=[Failure('x.go', 1, 2, 'syntax error')]),
        ]
        self.assertEqual([
            {
                'name': 'example.com/pkg',
                'status': 'PASS',
                'duration': '108ms',
                'coverage': 9.6,
                'summary': '',
                'tests': [
                    {'name': 'TestA', 'status': 'PASS', 'duration': '70ms', 'output': ['hello']},
                ],
            }, {
                'name': 'example.com/broken',
                'status': 'FAIL',
                'duration': '0s',
                'coverage': 0.0,
                'summary': '[build failed]',
                'tests': [],
                'errors': [
                    {'filename': 'x.go', 'row': 1, 'column': 2, 'message': 'syntax error'},
                ],
            }
        ], json.loads(resultdef.results_to_json(results, indent=1)))

    def test_counts(self):
        result = PackageResult('example.com/pkg', Status.FAIL, tests=[
            Test('TestA', Status.PASS), Test('TestB', Status.FAIL), Test('TestC', Status.PASS),
            Test('TestD', Status.SKIP), Test('TestE')])
        self.assertEqual(2, result.passed)
        self.assertEqual(1, result.failed)
        self.assertEqual(1, result.skipped)
