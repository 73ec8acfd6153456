"""Functions to set up common argument parsers."""

import argparse
import ast
from typing import Optional

from gotestparse import config


class StoreMultipleConstAction(argparse.Action):
    """Store the value of the const to multiple attributes.

    const holds the value to store (defaults to True) and attrs is an iterable
    of attribute names to store the value, in addition to dest.
    """

    def __init__(self,
                 option_strings,
                 dest: str,
                 const: bool = True,
                 attrs: Optional[list[str]] = None,
                 default=None,
                 required: bool = False,
                 help=None):     # noqa: A002
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=const,
            default=default,
            required=required,
            help=help)
        self.attrs = attrs if attrs else []

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, self.const)
        for attr in self.attrs:
            setattr(namespace, attr, self.const)


class OverrideConfigAction(argparse.Action):
    """argparsing action that adds a configuration override.

    The value is a Python literal, e.g. --set json_indent=None
    """
    def __init__(self,
                 option_strings,
                 dest: str,
                 default=None,
                 required: bool = False,
                 help=None):     # noqa: A002
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=1,
            default=default,
            required=required,
            metavar='NAME=VALUE',
            help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        for assignment in values:
            try:
                name, rawval = assignment.split('=', 1)
            except ValueError:
                parser.error(f'Missing = in {assignment}')
            try:
                val = ast.literal_eval(rawval) if rawval else ''
            except (ValueError, SyntaxError):
                parser.error(f'Invalid value for {name}: {rawval}')
            config.add_override(name, val)


def arguments_config(parser: argparse.ArgumentParser):
    """Add arguments needed for manipulating the configuration."""
    parser.add_argument(
        '--set',
        action=OverrideConfigAction,
        help='Override a config value')


def arguments_logging(parser: argparse.ArgumentParser):
    """Add arguments needed for logging."""
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show more log messages')
    parser.add_argument(
        '--debug',
        action=StoreMultipleConstAction,
        attrs=['verbose'],
        help='Show debug level log messages')
    parser.add_argument(
        '--level-prefix',
        action='store_true',
        help='Include syslog priority level in log message as <N> prefix')
