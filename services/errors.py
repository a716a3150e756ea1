"""Error types shared by the summarization and email proxies.

Every error carries a human-readable ``message`` that is returned verbatim to
the caller in the ``{"error": ...}`` response body.
"""


class SummarizerError(Exception):
    """Base class for errors surfaced at the API boundary."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRequestError(SummarizerError):
    """Raised when a request is missing or has malformed fields."""
    pass


class UpstreamError(SummarizerError):
    """Raised when the LLM provider or the mail transport call fails."""
    pass


class ConfigurationError(SummarizerError):
    """Raised when required configuration is missing."""
    pass
