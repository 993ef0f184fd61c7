"""
Error types raised by the reporting engine and the sales loader.
"""


class ReportError(Exception):
    """Base class for every error raised by retail_reports."""


class InvalidParameterError(ReportError, ValueError):
    """A caller passed a structurally invalid parameter (bad date, n <= 0, ...)."""


class InvalidRecordError(InvalidParameterError):
    """Sales rows failed schema validation at load time."""

    def __init__(self, message: str, failure_cases=None):
        super().__init__(message)
        self.failure_cases = failure_cases


class EmptyInputError(ReportError):
    """A report marked as requiring output produced nothing."""
