"""Type definitions for files."""

import io
from typing import Protocol, Union


class TextIOReadline(Protocol):
    """A typing.TextIO or BinaryIO class that need only provide a readline method.

    An empty string (or bytes) indicates the end of the stream.
    """

    def readline(self, size: int = -1) -> Union[str, bytes]:
        raise io.UnsupportedOperation
