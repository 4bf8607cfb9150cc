"""Exception hierarchy for LLM completion calls."""


class LLMError(Exception):
    """Base exception for all completion errors."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class LLMAuthError(LLMError):
    """Raised when the provider rejects the API key (HTTP 401)."""


class LLMRateLimitError(LLMError):
    """Raised when the provider throttles the request (HTTP 429)."""


class LLMServerError(LLMError):
    """Raised on provider-side failures (HTTP 5xx)."""


class LLMEmptyResponseError(LLMError):
    """Raised when a call succeeds but yields no text."""


class NoModelAvailableError(LLMError):
    """Raised when every configured model failed to produce a completion."""
