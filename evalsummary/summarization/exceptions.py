class SummarizationError(Exception):
    """Raised when the AI provider cannot produce a summary."""


class SummarizationUnauthorizedError(SummarizationError):
    """Raised when the provider rejects the API key."""


class SummarizationRateLimitedError(SummarizationError):
    """Raised when the provider throttles the request."""


class SummarizationOversizedError(SummarizationError):
    """Raised when the provider refuses the payload as too large."""


class SummarizationNetworkError(SummarizationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
