"""
Module: errors.py
Description: Exception hierarchy for the SQS client.

Configuration and not-implemented errors are raised synchronously to
the caller. Service and transport errors are produced on the
asynchronous path and delivered through the failure continuation and
the returned Failure outcome; they are never raised out of a
dispatch task.
"""

from typing import Optional

import httpx


class SQSError(Exception):
    """Top-level exception for client errors."""


class ConfigurationError(SQSError, ValueError):
    """Missing credential, unknown region or missing operation argument."""


class NotImplementedOperationError(SQSError, NotImplementedError):
    """The operation exists in the API but is not implemented by this client."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} is not implemented yet")


class ResponseParseError(SQSError, ValueError):
    """A response body could not be parsed into the expected type."""


class ServiceError(SQSError):
    """
    The service answered with an error envelope.

    Attributes:
        body: Raw response body
        status_code: HTTP status code of the response
        code: Error code from the envelope (e.g. 'AWS.SimpleQueueService.NonExistentQueue')
        message: Error message from the envelope
        request_id: Request id reported by the service
    """

    def __init__(
        self,
        body: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        message: Optional[str] = None,
        request_id: Optional[str] = None
    ):
        self.body = body
        self.status_code = status_code
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(body)

    def __str__(self) -> str:
        if self.code:
            return f"{self.code}: {self.message or ''}".rstrip()
        return self.body


class TransportError(SQSError):
    """The HTTP layer failed before a response body was received."""

    def __init__(self, cause: httpx.HTTPError):
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.cause, httpx.TimeoutException)

    def __str__(self) -> str:
        return f"{type(self.cause).__name__}: {self.cause}"
