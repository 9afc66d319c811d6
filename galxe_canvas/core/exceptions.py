"""
Custom exceptions for the Galxe canvas service.

Provides a hierarchy of exceptions so that every failure a submission can hit
carries a kind tag and a human-readable message for the error canvas.
"""

from typing import Any, Dict, Optional

from galxe_canvas.core.models import FailureKind


class GalxeCanvasError(Exception):
    """Base exception for all service errors."""

    kind: Optional[FailureKind] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SubmissionError(GalxeCanvasError):
    """Base class for request-scoped submission validation errors."""
    pass


class InvalidPayloadError(SubmissionError):
    """The inbound widget payload could not be decoded."""

    kind = FailureKind.INVALID_PAYLOAD


class MissingAddressError(SubmissionError):
    """No wallet address was supplied."""

    kind = FailureKind.MISSING_ADDRESS


class MissingTargetError(SubmissionError):
    """Neither a campaign id nor a non-zero space id was supplied."""

    kind = FailureKind.MISSING_TARGET


class MalformedTargetError(SubmissionError):
    """The space id was not a non-negative integer."""

    kind = FailureKind.MALFORMED_TARGET


class RemoteQueryError(GalxeCanvasError):
    """Transport, status, GraphQL or decode failure from the query service."""

    kind = FailureKind.REMOTE_QUERY_FAILED

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(f"{operation}: {message}", **kwargs)
        self.operation = operation
        self.status_code = status_code


class EncodingError(GalxeCanvasError):
    """The response envelope could not be serialized."""

    kind = FailureKind.ENCODING_FAILED
