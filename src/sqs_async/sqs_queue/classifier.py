"""
Module: classifier.py
Description: Failure classification and logging for dispatched requests.

Normalizes a transport failure or an error-envelope response into one
SQSError, logs it at error severity with bounded call-stack context,
and hands it to the failure continuation when one was supplied.
"""

import re
import traceback
from typing import Any, Callable, Optional

import httpx

from ..errors import ResponseParseError, ServiceError, SQSError, TransportError
from ..models._xml import child_text, iter_named, local_name, parse_document
from ..utils.logger import get_logger

module_logger = get_logger(__name__)

ERROR_ENVELOPE = re.compile(r"<ErrorResponse[\s>]", re.IGNORECASE)
STACK_DEPTH = 8
SEPARATOR = "-" * 80


def has_error_envelope(body: str) -> bool:
    """Whether a response body carries the service's error envelope."""
    return bool(ERROR_ENVELOPE.search(body))


def service_error(response: httpx.Response) -> ServiceError:
    """
    Build a ServiceError from a response.

    Code, Message and RequestId are filled in when the envelope is well
    formed; a body that does not parse still yields a ServiceError that
    carries the raw text.
    """
    body = response.text
    code = message = request_id = None
    try:
        root = parse_document(body)
    except ResponseParseError:
        root = None

    if root is not None:
        for error in iter_named(root, "Error"):
            code = child_text(error, "Code")
            message = child_text(error, "Message")
            break
        for node in root.iter():
            if local_name(node) == "RequestId":
                request_id = node.text
                break

    return ServiceError(
        body=body,
        status_code=response.status_code,
        code=code,
        message=message,
        request_id=request_id
    )


class ErrorClassifier:
    """Normalizes, logs and routes failures of dispatched requests."""

    def __init__(self, logger: Optional[Any] = None):
        self.logger = logger if logger is not None else module_logger

    def classify(
        self,
        response: Optional[httpx.Response] = None,
        error: Optional[BaseException] = None
    ) -> SQSError:
        """
        Normalize a failure to a single SQSError.

        A transport-level error wins over the response body.
        """
        if isinstance(error, SQSError):
            return error
        if isinstance(error, httpx.HTTPError):
            return TransportError(error)
        if response is not None:
            return service_error(response)
        raise ValueError("classify() needs a response or an error")

    def log(self, failure: SQSError, **context: Any) -> None:
        stack = traceback.format_stack(limit=STACK_DEPTH)[:-1]
        self.logger.error(
            "SERVICE ERROR",
            call_stack="\n\t".join(frame.strip() for frame in stack),
            separator=SEPARATOR,
            error=str(failure),
            error_type=type(failure).__name__,
            **context
        )

    def on_failure(
        self,
        failure: SQSError,
        callback: Optional[Callable[[SQSError], Any]] = None,
        **context: Any
    ) -> SQSError:
        """
        Log a normalized failure and invoke the failure continuation.

        Without a continuation the failure is only logged.
        """
        self.log(failure, **context)
        if callback is not None:
            callback(failure)
        return failure
