"""Fatal conditions raised by the normalization pipeline.

Every error carries the process exit code the CLI returns for it. Library
code raises these; only ``assetnorm.cli.main`` turns them into exit codes.
"""

from typing import Optional


class AssetNormError(Exception):
    exit_code = 1


class InvalidArguments(AssetNormError):
    exit_code = 2


class InputNotFound(AssetNormError):
    exit_code = 3


class InputReadError(AssetNormError):
    exit_code = 4


class MalformedNumber(InputReadError):
    """A numeric field was demanded but the token was absent or not a number."""

    def __init__(self, token: Optional[str], line_no: int, expected: str = "number"):
        self.token = token
        self.line_no = line_no
        self.expected = expected
        found = "end of input" if token is None else repr(token)
        super().__init__(f"line {line_no}: expected {expected}, found {found}")


class OutputExists(AssetNormError):
    exit_code = 5


class OutputCreateError(AssetNormError):
    exit_code = 6


class OutputWriteError(AssetNormError):
    exit_code = 7


class EmptyGeometry(AssetNormError):
    exit_code = 8
