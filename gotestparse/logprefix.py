"""Class to remove a prefix from each log line."""

import re
from typing import Union

from gotestparse.filedef import TextIOReadline


# Timestamp at the start of every line of a raw GitHub Actions job log
GHA_TIMESTAMP_RE = re.compile(r'^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d+Z ')


class RegexPrefixedLog:
    """File wrapper that removes a matching regex at the head of every log line.

    Lines that don't match are sent through unchanged. A stream returning bytes is matched
    against the regex's pattern encoded as UTF-8.
    """
    def __init__(self, f: TextIOReadline, regex: Union[re.Pattern, str]):
        self.file_obj = f
        self.regex = re.compile(regex)
        self._bregex = None

    def __getattr__(self, attr: str):
        """Pass any other references to the file object."""
        return getattr(self.file_obj, attr)

    def readline(self, size: int = -1) -> Union[str, bytes]:
        l = self.file_obj.readline(size)
        if not l:
            return l
        if isinstance(l, bytes):
            if self._bregex is None:
                pattern = self.regex.pattern
                if isinstance(pattern, str):
                    pattern = pattern.encode('utf-8')
                self._bregex = re.compile(pattern)
            return self._bregex.sub(b'', l, count=1)
        return self.regex.sub('', l, count=1)
