"""Parses the output of go test into structured package and test results."""

__version__ = '0.1'
