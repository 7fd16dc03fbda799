class CredentialError(Exception):
    """Base exception for API key validation errors."""


class MalformedCredentialError(CredentialError):
    """Raised when an API key does not have the expected shape."""

    def __init__(self, message: str = "Invalid API key format") -> None:
        super().__init__(message)
