"""
Module: dispatcher.py
Description: Asynchronous dispatch of signed Query API requests.

Resolves the endpoint, signs the request and issues a non-blocking GET
through httpx. Each request resolves to exactly one Success or Failure
and fires exactly one of its continuations.

Key Components:
- Dispatcher.submit(): Schedule a request on the running loop, return its task
- Dispatcher.dispatch(): Coroutine that performs the request
- Endpoint resolution: explicit queue, host override or region host

Dependencies: asyncio, httpx, typing
"""

import asyncio
from typing import Any, Callable, Dict, Optional, Union

import httpx

from ..config.regions import DEFAULT_REGION, DEFAULT_REGIONS, RegionRegistry
from ..errors import ConfigurationError, ResponseParseError, SQSError
from ..models.outcome import Callbacks, Failure, Outcome, Success
from ..models.queue import Queue
from ..signing.signer import QuerySigner
from ..utils.logger import get_logger
from .classifier import ErrorClassifier, has_error_envelope

module_logger = get_logger(__name__)

Transform = Callable[[httpx.Response], Any]


class Dispatcher:
    """
    Signs and sends requests, routing each response to one continuation.

    Attributes:
        signer: Signer holding the credentials and protocol defaults
        regions: Region registry used when no queue or host is given
        region: Default region id
        host: Host override, takes precedence over the region host
        scheme: URL scheme used for region and host endpoints
        logger: Structured logger shared with the default classifier
    """

    def __init__(
        self,
        signer: QuerySigner,
        http_client: httpx.AsyncClient,
        regions: RegionRegistry = DEFAULT_REGIONS,
        region: str = DEFAULT_REGION,
        host: Optional[str] = None,
        scheme: str = "https",
        classifier: Optional[ErrorClassifier] = None,
        logger: Optional[Any] = None
    ):
        self.signer = signer
        self.regions = regions
        self.region = region
        self.host = host
        self.scheme = scheme
        self.logger = logger if logger is not None else module_logger
        self.classifier = classifier or ErrorClassifier(logger=self.logger)
        self._http = http_client

        # Unknown default region fails at construction, not at first call
        self.regions.host(region)

    def resolve_endpoint(
        self,
        queue: Union[Queue, str, None] = None,
        host: Optional[str] = None,
        region: Optional[str] = None
    ) -> str:
        """Return the queue URL, or scheme://host for account-level actions."""
        if queue is not None:
            return queue.queue_url if isinstance(queue, Queue) else str(queue)
        if not host:
            if region:
                host = self.regions.host(region)
            else:
                host = self.host or self.regions.host(self.region)
        return f"{self.scheme}://{host}"

    def build_url(self, endpoint: str, options: Dict[str, Any]) -> str:
        """Sign options for endpoint and return the full request URL."""
        return f"{endpoint}?{self.signer.sign(endpoint, options)}"

    def submit(
        self,
        options: Dict[str, Any],
        transform: Optional[Transform] = None
    ) -> "asyncio.Task[Outcome]":
        """
        Sign a request and schedule it on the running event loop.

        Endpoint resolution and signing happen before this returns, so
        configuration errors are raised to the caller. The request itself
        runs in the returned task, which resolves to an Outcome and never
        raises for service or transport failures.

        Options may carry 'queue', 'host', 'region' and 'callbacks'; they
        are removed before signing.

        Raises:
            ConfigurationError: If the request cannot be signed
            RuntimeError: If called without a running event loop
        """
        options = dict(options)
        callbacks = options.pop("callbacks", None) or Callbacks()
        if not isinstance(callbacks, Callbacks):
            raise ConfigurationError("callbacks must be a Callbacks instance")
        endpoint = self.resolve_endpoint(
            queue=options.pop("queue", None),
            host=options.pop("host", None),
            region=options.pop("region", None)
        )
        url = self.build_url(endpoint, options)
        action = options.get("action")

        loop = asyncio.get_running_loop()
        return loop.create_task(self.dispatch(url, callbacks, transform, action=action))

    async def dispatch(
        self,
        url: str,
        callbacks: Callbacks,
        transform: Optional[Transform] = None,
        action: Optional[str] = None
    ) -> Outcome:
        """Send a signed GET and route the result to one continuation."""
        self.logger.debug("Dispatching request", action=action, url=url.split("?", 1)[0])

        try:
            response = await self._http.get(url)
        except httpx.HTTPError as e:
            return self._fail(self.classifier.classify(error=e), callbacks, action)

        # A non-2xx status without an error envelope is still a ServiceError,
        # never a success handed to the transform
        if has_error_envelope(response.text) or not response.is_success:
            return self._fail(self.classifier.classify(response=response), callbacks, action)

        try:
            result = transform(response) if transform is not None else response
        except ResponseParseError as e:
            return self._fail(e, callbacks, action)
        except Exception as e:
            parse_error = ResponseParseError(f"response transform failed: {e}")
            parse_error.__cause__ = e
            return self._fail(parse_error, callbacks, action)

        self.logger.info("Request succeeded", action=action, status_code=response.status_code)
        if callbacks.success is not None:
            try:
                callbacks.success(result)
            except Exception as e:
                self.logger.error(
                    "Success callback raised",
                    action=action,
                    error=str(e),
                    error_type=type(e).__name__
                )
        return Success(result)

    def _fail(self, error: SQSError, callbacks: Callbacks, action: Optional[str]) -> Failure:
        try:
            self.classifier.on_failure(error, callbacks.failure, action=action)
        except Exception as e:
            self.logger.error(
                "Failure callback raised",
                action=action,
                error=str(e),
                error_type=type(e).__name__
            )
        return Failure(error)
