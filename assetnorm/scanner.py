import math
import re
from typing import Optional, TextIO

from .errors import MalformedNumber

_TOKEN = re.compile(r"\S+")


def numeric(token: Optional[str]) -> bool:
    """False for a missing token or one using digit grouping (``1_0``), which float() would accept."""

    return token is not None and "_" not in token


class TokenScanner:
    """Lazy whitespace tokenizer over a text stream.

    Tokens are pulled one at a time, and the raw remainder of the current
    line stays reachable so callers can copy records they do not rewrite.
    Reaching the end of the stream is signalled by ``None``, never raised.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._line: Optional[str] = None
        self._pos = 0
        self.line_no = 0
        # Last token handed out, kept so callers can re-emit it as written.
        self.token: Optional[str] = None

    def _load(self) -> bool:
        raw = self._stream.readline()
        if not raw:
            self._line = None
            return False
        self.line_no += 1
        self._line = raw.rstrip("\r\n")
        self._pos = 0
        return True

    def next_line(self) -> Optional[str]:
        """Return the next raw line without its terminator, or None at end of stream."""

        if not self._load():
            return None
        line = self._line
        self._line = None
        return line

    def start_line(self) -> Optional[str]:
        """Read the next raw line but leave its tokens pending.

        Follow up with ``next_token(cross_lines=False)`` to walk the fields of
        this line only.
        """

        if not self._load():
            return None
        return self._line

    def rest_of_line(self) -> Optional[str]:
        """Consume and return whatever is left of the current line.

        When no line is pending the next one is read whole. Returns None at
        end of stream.
        """

        if self._line is None and not self._load():
            return None
        rest = self._line[self._pos:]
        self._line = None
        return rest

    def next_token(self, cross_lines: bool = True) -> Optional[str]:
        while True:
            if self._line is None:
                if not cross_lines or not self._load():
                    return None
            match = _TOKEN.search(self._line, self._pos)
            if match:
                self._pos = match.end()
                self.token = match.group()
                return self.token
            if not cross_lines:
                return None
            self._line = None

    def next_float(self, cross_lines: bool = True) -> float:
        token = self.next_token(cross_lines)
        try:
            value = float(token) if numeric(token) else None
        except ValueError:
            value = None
        if value is None or not math.isfinite(value):
            raise MalformedNumber(token, self.line_no, "finite number")
        return value

    def next_int(self, cross_lines: bool = True) -> int:
        token = self.next_token(cross_lines)
        try:
            value = int(token) if numeric(token) else None
        except ValueError:
            value = None
        if value is None or value < 0:
            raise MalformedNumber(token, self.line_no, "non-negative integer")
        return value
