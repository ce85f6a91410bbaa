"""
Error taxonomy for the reporting proxy.

Cache errors never leave the cache adapters: a failed read is a miss and a
failed write is logged. Upstream errors always reach the HTTP boundary.
"""


class CacheReadError(Exception):
    """Cache file missing, unreadable or not valid JSON."""


class CacheWriteError(Exception):
    """Cache file could not be written."""


class UpstreamError(Exception):
    """The vendor call failed. status_code is None for transport failures."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamHTTPError(UpstreamError):
    """The vendor answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "", reason: str = ""):
        super().__init__(
            f"Upstream error ({status_code}): {reason or body[:200]}",
            status_code=status_code,
            body=body,
        )


class UpstreamParseError(UpstreamError):
    """The vendor answered 2xx but the body is not a JSON object."""

    def __init__(self, body: str = ""):
        super().__init__("Invalid JSON response from vendor", body=body)


class ValidationError(ValueError):
    """A day or month query parameter is malformed."""
