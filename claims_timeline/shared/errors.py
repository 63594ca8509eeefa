"""
Exception types raised by the normalizer, the batch processor and the config layer.

Item- and file-level errors are caught where they originate and turned into
warnings or per-file error entries; only whole-operation errors reach callers.
"""
from __future__ import annotations


class ClaimsTimelineError(Exception):
    """Base class for all errors raised by this package."""


class InvalidDocumentError(ClaimsTimelineError):
    """Top-level input is not a JSON object (or is not JSON at all)."""


class NoClaimsFoundError(ClaimsTimelineError):
    """Normalization finished with zero claim items."""

    def __init__(self, message: str = "No valid claims found in the data") -> None:
        super().__init__(message)


class UnparseableDateError(ClaimsTimelineError):
    """A date value matched none of the accepted formats."""

    def __init__(self, value: object) -> None:
        self.value = value
        if value is None or (isinstance(value, str) and not value.strip()):
            message = "Date string is required"
        else:
            message = f'Unable to parse date: "{value}"'
        super().__init__(message)


class MalformedSectionError(ClaimsTimelineError):
    """A claims section exists but does not have the expected nested list."""


class FolderScanError(ClaimsTimelineError):
    """The folder itself could not be enumerated."""


class NoValidFilesError(ClaimsTimelineError):
    """A folder scan succeeded but found no usable claims files."""


class FileIOError(ClaimsTimelineError):
    """Reading or writing one particular file failed."""


class ConfigError(ClaimsTimelineError):
    """Configuration file is missing, unreadable or fails validation."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        self.problems = list(problems or [])
        if self.problems:
            message = message + ": " + "; ".join(self.problems)
        super().__init__(message)
