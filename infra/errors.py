"""Error taxonomy for log ingestion and configuration."""
from typing import Optional


# Error code taxonomy
class ErrorCodes:
    # Input errors
    FILE_NOT_FOUND = "E.IO.001"
    FILE_UNREADABLE = "E.IO.002"
    MALFORMED_ROW = "E.PARSE.001"

    # Configuration errors
    INVALID_CONFIG = "E.CFG.001"


class ForensicsError(Exception):
    """Base class for errors raised at the boundary of the analyzer."""

    error_code = "E.GEN.000"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class LogFileError(ForensicsError):
    error_code = ErrorCodes.FILE_NOT_FOUND


class LogParseError(ForensicsError, ValueError):
    """A row of the log could not be parsed into the event schema."""

    error_code = ErrorCodes.MALFORMED_ROW

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class ConfigError(ForensicsError):
    error_code = ErrorCodes.INVALID_CONFIG
