class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class InvalidUploadError(ProcessorError):
    """Raised when an upload is missing, empty or not a PDF."""


class EmptyTextError(ProcessorError):
    """Raised when there is no text left to summarize."""


class PayloadTooLargeError(ProcessorError):
    """Raised when an upload exceeds the configured size limit."""

    @classmethod
    def for_limit(cls, limit_bytes: int) -> "PayloadTooLargeError":
        return cls(f"File too large. Maximum size is {limit_bytes / 1024 / 1024:g}MB")


class UploadReadError(ProcessorError):
    """Raised when a staged upload cannot be read back from disk."""
