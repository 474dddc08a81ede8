"""Exceptions for the carrier app.

Every error carries a ``public_message`` that is safe to show an installer.
Diagnostic detail (upstream bodies, missing setting names) stays on the
exception for logging and is never rendered into a response.
"""

from __future__ import annotations


class CarrierAppError(Exception):
    """Base exception for all carrier app errors."""

    status_code = 500
    public_message = "Something went wrong."
    as_json = False  # JSON-API routes answer {"error": ...} instead of plain text

    def __init__(self, detail: str = "", public_message: str | None = None):
        self.detail = detail
        if public_message is not None:
            self.public_message = public_message
        super().__init__(detail or self.public_message)


class MissingParameterError(CarrierAppError):
    """Raised when a request lacks a required query or body parameter."""

    status_code = 400
    public_message = "Missing required parameter"

    def __init__(self, names: list[str], public_message: str | None = None):
        self.names = names
        super().__init__(f"Missing parameter(s): {', '.join(names)}", public_message)


class ConfigurationError(CarrierAppError):
    """Raised when a handler needs a setting that is not configured."""

    status_code = 500
    public_message = "Server is not configured for installation."

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing configuration: {', '.join(missing)}")


class TokenExchangeError(CarrierAppError):
    """Raised when BigCommerce rejects or fails the code-for-token exchange."""

    status_code = 500
    public_message = "OAuth callback failed: token exchange error"

    def __init__(self, detail: str, upstream_status: int | None = None):
        self.upstream_status = upstream_status
        super().__init__(detail)


class MetadataRegistrationError(CarrierAppError):
    """Raised when endpoint metadata cannot be registered. Logged, never surfaced."""

    def __init__(self, store_hash: str, detail: str):
        self.store_hash = store_hash
        super().__init__(f"Metadata registration failed for {store_hash}: {detail}")


class MalformedBodyError(CarrierAppError):
    """Raised when a request body is not valid JSON."""

    status_code = 400
    public_message = "Invalid JSON body"
    as_json = True
