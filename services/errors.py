from typing import Any, Optional


class GatewayError(Exception):
    """Base for every error rendered as ``{"error": ..., "details": ...}``."""

    status_code = 500

    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class UpstreamError(GatewayError):
    """CRM or model API call failed; status is relayed from upstream when known."""


class InvalidRequestError(GatewayError):
    status_code = 400


class NotFoundError(GatewayError):
    status_code = 404


class InsightParseError(GatewayError):
    """Model answered, but no usable insight object could be pulled out of the text."""

    def __init__(self, raw_text: str, reason: str = "Failed to parse JSON from AI response"):
        super().__init__(reason)
        self.raw_text = raw_text
