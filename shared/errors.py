"""
Shared error handling for the storefront gateway.

Every error carries the HTTP status the client sees and a terse message
that is safe to return verbatim. ``details`` is for server-side logs only
and is never serialized into a client response.
"""

from typing import Dict, Any, Optional


class GatewayError(Exception):
    """Base exception for gateway failures."""

    status_code = 500
    code = "GATEWAY_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class BadRequestError(GatewayError):
    """Malformed or undecodable client request."""

    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str = "Invalid request body", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class MethodNotAllowedError(GatewayError):
    """Request used a verb the route does not accept."""

    status_code = 405
    code = "METHOD_NOT_ALLOWED"

    def __init__(self, message: str = "Method not allowed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class UpstreamUnavailableError(GatewayError):
    """Upstream unreachable, timed out, or answered with a failure status."""

    status_code = 502
    code = "UPSTREAM_UNAVAILABLE"

    def __init__(
        self,
        message: str = "Backend service unavailable",
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.upstream_status = upstream_status
        super().__init__(message, details)


class UpstreamContractError(GatewayError):
    """Upstream answered successfully with a body the gateway cannot decode."""

    status_code = 500
    code = "UPSTREAM_CONTRACT_VIOLATION"

    def __init__(self, message: str = "Failed to parse backend response", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
