"""Package-specific exception types."""

from __future__ import annotations


class ReflowError(ValueError):
    """Base class for reflow-related errors.

    The reflow engine itself never raises on document content; these errors
    come from the layers that feed it (files, configuration).
    """


class ReflowFileError(ReflowError):
    """Raised when a document file cannot be reflowed.

    Args:
        filepath: Path of the offending file.
        reason: Description of what went wrong.
    """

    def __init__(self, filepath: object, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"{filepath}: {reason}")
