# tcmchart/chart/errors.py
from __future__ import annotations

from typing import List


class ChartError(Exception):
    """
    Base class for chart errors that callers are expected to handle.
    """


class UnknownFieldError(ChartError):
    def __init__(self, path: str):
        super().__init__(f"Unknown chart field: {path!r}")
        self.path = path


class ImmutableFieldError(ChartError):
    def __init__(self, path: str):
        super().__init__(f"Chart field {path!r} cannot be changed")
        self.path = path


class InvalidFieldValueError(ChartError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid value for {path!r}: {reason}")
        self.path = path
        self.reason = reason


class ChartValidationError(ChartError):
    """
    Required fields are missing; nothing was written.
    """

    def __init__(self, missing: List[str]):
        super().__init__(
            "Please fill in all required fields: " + ", ".join(missing)
        )
        self.missing = missing
