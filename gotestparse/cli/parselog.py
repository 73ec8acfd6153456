"""Parses captured go test logs and writes the results as JSON.

Each input is parsed on its own, so a log that cannot be parsed doesn't prevent the others from
being reported. The exit code is 1 if any input could not be read or parsed or if any package
failed.
"""

import argparse
import contextlib
import logging
import re
import sys
from typing import Optional

from gotestparse import argparsing
from gotestparse import config
from gotestparse import log
from gotestparse import logprefix
from gotestparse import netreq
from gotestparse.filedef import TextIOReadline
from gotestparse.logparser import gotestlog
from gotestparse.resultdef import PackageResults, Status, results_to_json


def parse_args(args=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Parse go test -v output into JSON package results')
    argparsing.arguments_logging(parser)
    argparsing.arguments_config(parser)
    parser.add_argument(
        '--url',
        action='append',
        default=[],
        help='URL of a captured log to retrieve and parse; may be given more than once')
    parser.add_argument(
        '--strip-prefix',
        help='Regular expression to remove from the start of each line '
             '(default is the strip_prefix_regex config value)')
    parser.add_argument(
        '--gha',
        action='store_const',
        dest='strip_prefix',
        const=logprefix.GHA_TIMESTAMP_RE.pattern,
        help='Remove GitHub Actions timestamps from the start of each line')
    parser.add_argument('files', nargs='*', type=argparse.FileType('r'))
    return parser.parse_args(args=args)


def parse_input(name: str, f: TextIOReadline,
                prefix_re: Optional[re.Pattern]) -> Optional[PackageResults]:
    """Parse one log, returning None if it couldn't be parsed."""
    if prefix_re:
        f = logprefix.RegexPrefixedLog(f, prefix_re)
    try:
        results = gotestlog.parse_log_file(f)
    except gotestlog.ParseError as e:
        logging.error('%s: unable to parse test output: %s', name, e)
        return None
    logging.info('Found %d package results in %s', len(results), name)
    return results


def main(args=None) -> int:
    args = parse_args(args)
    log.setup(args)

    prefix = args.strip_prefix if args.strip_prefix is not None else config.get('strip_prefix_regex')
    try:
        prefix_re = re.compile(prefix) if prefix else None
    except re.error as e:
        logging.error('Invalid prefix regular expression %s: %s', prefix, e)
        return 1

    files = args.files
    if not files and not args.url:
        files = [sys.stdin]

    allresults = []  # type: PackageResults
    errors = 0
    for file in files:
        with file if file is not sys.stdin else contextlib.nullcontext(file):
            results = parse_input(file.name, file, prefix_re)
        if results is None:
            errors += 1
        else:
            allresults.extend(results)

    for url in args.url:
        try:
            f = netreq.fetch_log(url)
        except netreq.RequestException as e:
            logging.error('%s: unable to retrieve log: %s', url, e)
            errors += 1
            continue
        results = parse_input(url, f, prefix_re)
        if results is None:
            errors += 1
        else:
            allresults.extend(results)

    print(results_to_json(allresults, indent=config.get('json_indent')))

    if errors or any(r.status == Status.FAIL for r in allresults):
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
