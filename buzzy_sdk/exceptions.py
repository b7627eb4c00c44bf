"""Public exceptions for the Buzzy SDK."""


class BuzzyError(Exception):
    """Base exception for all Buzzy SDK errors."""


class BuzzyAPIError(BuzzyError):
    """Transport failure talking to a Buzzy instance.

    ``status_code`` is set when the server answered with a non-2xx status and
    is None for timeouts, network errors and malformed URLs; the underlying
    httpx exception is then chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class BuzzyConfigError(BuzzyError):
    """Configuration error (invalid env vars, invalid throttle settings)."""


class BuzzyValidationError(BuzzyError):
    """Operation called with missing or unknown fields."""
