"""Error types raised while parsing an almanac or assembling a pipeline."""
from __future__ import annotations

from collections.abc import Iterable


class AlmanacError(ValueError):
    """Base class for almanac input errors."""


class ParseError(AlmanacError):
    """Raised when almanac text is malformed."""

    def __init__(self, message: str, *, line_no: int | None = None) -> None:
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no


class MissingStageError(AlmanacError):
    """Raised when a required stage name has no parsed table."""

    def __init__(self, stage: str, available: Iterable[str] = ()) -> None:
        self.stage = stage
        self.available = tuple(available)
        known = ", ".join(self.available) or "<none>"
        super().__init__(f"missing stage {stage!r} (available: {known})")
