"""Typed errors raised by the fleet API client.

Transport failures (connection refused, timeouts) are not wrapped: they
surface as ``requests.RequestException`` exactly as raised.
"""

from typing import Optional


class ApiError(Exception):
    """Non-2xx response from the fleet API."""

    def __init__(self, status_code: int, message: str, url: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"API call failed: {status_code} {message}")


class AuthenticationRequired(ApiError):
    """401 from the API: the caller must drop its credential and re-authenticate."""

    def __init__(self, message: str = "Authentication required", url: Optional[str] = None):
        super().__init__(401, message, url)


class EnvelopeError(ApiError):
    """Successful response whose body does not match the expected envelope."""

    def __init__(self, status_code: int, message: str = "Invalid response format",
                 url: Optional[str] = None):
        super().__init__(status_code, message, url)
