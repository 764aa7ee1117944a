"""
Module: client.py
Description: Queue service client exposing the Query API operations.

Each operation validates its arguments synchronously, adds the Action
discriminator and hands the request to the Dispatcher. The call returns
an asyncio task as soon as the request is scheduled; the task resolves
to a Success or Failure outcome, and the optional callbacks fire when
it completes.

Key Components:
- SQSClient: Operation methods, construction from Settings, lifecycle
- Argument validation raising ConfigurationError before any I/O
- Unimplemented operations raising NotImplementedOperationError

Dependencies: asyncio, httpx, re, typing
"""

import asyncio
import re
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, TextIO, Union

import httpx

from ..config.regions import (
    DEFAULT_PROTOCOL,
    DEFAULT_REGION,
    DEFAULT_REGIONS,
    ProtocolDefaults,
    RegionRegistry,
)
from ..config.settings import Settings
from ..errors import ConfigurationError, NotImplementedOperationError, ResponseParseError
from ..models.attributes import QueueAttributes
from ..models.message import Message
from ..models.outcome import Callbacks, Outcome
from ..models.permission import Permission
from ..models.queue import Queue
from ..signing.signer import DEFAULT_EXPIRES_IN, QuerySigner
from ..utils.logger import build_logger, get_logger
from .dispatcher import Dispatcher

module_logger = get_logger(__name__)

QueueRef = Union[Queue, str]

DEFAULT_VISIBILITY_TIMEOUT = 30
DEFAULT_MAX_NUMBER_OF_MESSAGES = 10


def _queue_url(queue: QueueRef) -> str:
    return queue.queue_url if isinstance(queue, Queue) else queue


def _created_queue(response: httpx.Response) -> Queue:
    queues = Queue.parse_list(response.content)
    if not queues:
        raise ResponseParseError("CreateQueue response without a queue")
    return queues[0]


class SQSClient:
    """
    Asynchronous client for the queue service Query API.

    Operations must be called from a running event loop. They return an
    asyncio task immediately; await it (or rely on the callbacks) for
    the outcome.

    Attributes:
        dispatcher: Signs, sends and routes every request
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        region: str = DEFAULT_REGION,
        host: Optional[str] = None,
        scheme: str = "https",
        regions: RegionRegistry = DEFAULT_REGIONS,
        protocol: ProtocolDefaults = DEFAULT_PROTOCOL,
        timeout_seconds: float = 30.0,
        expires_in: int = DEFAULT_EXPIRES_IN,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[Any] = None
    ):
        """
        Initialize the client.

        Args:
            access_key: Access key id sent with every request
            secret_key: Secret used to sign every request
            region: Default region id for account-level actions
            host: Explicit API host, overrides the region host
            scheme: URL scheme for region and host endpoints
            regions: Region registry
            protocol: Protocol defaults (version and signature settings)
            timeout_seconds: HTTP timeout for the owned HTTP client
            expires_in: Lifetime of a signed request in seconds
            http_client: Shared httpx.AsyncClient; left open by aclose()
            clock: Returns the current UTC time, used for Expires
            logger: Structured logger for this client; defaults to the
                module logger, which follows the application's structlog setup

        Raises:
            ConfigurationError: If the default region is unknown
        """
        self.logger = logger if logger is not None else module_logger
        self._log_file: Optional[TextIO] = None
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds, connect=timeout_seconds)
        )

        signer = QuerySigner(
            access_key=access_key,
            secret_key=secret_key,
            protocol=protocol,
            expires_in=expires_in,
            clock=clock,
            logger=self.logger
        )
        self.dispatcher = Dispatcher(
            signer=signer,
            http_client=self._http,
            regions=regions,
            region=region,
            host=host,
            scheme=scheme,
            logger=self.logger
        )

        self.logger.info(
            "SQS client initialized",
            region=region,
            host=host or regions.host(region),
            scheme=scheme
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "SQSClient":
        """
        Build a client from Settings.

        The log level and log path apply to this client only; it writes
        through its own logger and the global structlog configuration is
        left as the application set it. A log file opened here is closed
        by aclose(). An explicit logger in kwargs takes precedence.
        """
        log_file = None
        if "logger" not in kwargs:
            if settings.log_path:
                log_file = open(settings.log_path, "a", encoding="utf-8")
            kwargs["logger"] = build_logger(settings.log_level, log_file)

        try:
            client = cls(
                access_key=settings.access_key,
                secret_key=settings.secret_key.get_secret_value(),
                region=settings.region,
                host=settings.host,
                scheme=settings.scheme,
                timeout_seconds=settings.timeout_seconds,
                expires_in=settings.expires_in_seconds,
                **kwargs
            )
        except Exception:
            if log_file is not None:
                log_file.close()
            raise
        client._log_file = log_file
        return client

    async def aclose(self) -> None:
        """Close the HTTP client and log file if this instance opened them."""
        if self._owns_http_client:
            await self._http.aclose()
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None

    async def __aenter__(self) -> "SQSClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # Queue operations

    def list_queues(
        self,
        prefix: Optional[str] = None,
        match: Union[str, "re.Pattern[str]", None] = None,
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        """
        List queues, optionally by name prefix and URL path pattern.

        Args:
            prefix: Sent as QueueNamePrefix
            match: Regular expression searched in each queue URL path;
                applied locally to the parsed result
        """
        pattern = re.compile(match) if isinstance(match, str) else match

        def transform(response: httpx.Response) -> List[Queue]:
            queues = Queue.parse_list(response.content)
            if pattern is not None:
                queues = [q for q in queues if pattern.search(q.path)]
            return queues

        options = dict(params, action="ListQueues", callbacks=callbacks)
        if prefix:
            options["queue_name_prefix"] = prefix
        return self.dispatcher.submit(options, transform=transform)

    def create_queue(
        self,
        queue_name: Optional[str] = None,
        default_visibility_timeout: Optional[int] = None,
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        """Create a queue; the outcome carries the new Queue."""
        if not queue_name:
            raise ConfigurationError("no queue name specified")

        if default_visibility_timeout is None:
            default_visibility_timeout = DEFAULT_VISIBILITY_TIMEOUT

        options = dict(
            params,
            action="CreateQueue",
            queue_name=queue_name,
            default_visibility_timeout=default_visibility_timeout,
            callbacks=callbacks
        )
        return self.dispatcher.submit(options, transform=_created_queue)

    def delete_queue(
        self,
        queue: Optional[QueueRef] = None,
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        if not queue:
            raise ConfigurationError("no target queue specified")

        options = dict(params, action="DeleteQueue", queue=queue, callbacks=callbacks)
        return self.dispatcher.submit(options)

    def get_queue_attributes(
        self,
        queue: Optional[QueueRef] = None,
        attribute_name: Union[str, Sequence[str]] = "All",
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        """Fetch queue attributes; the outcome carries QueueAttributes."""
        if not queue:
            raise ConfigurationError("no target queue specified")

        options = dict(
            params,
            action="GetQueueAttributes",
            queue=queue,
            attribute_name=attribute_name,
            callbacks=callbacks
        )
        return self.dispatcher.submit(
            options,
            transform=lambda response: QueueAttributes.parse(response.content)
        )

    # Message operations

    def receive_message(
        self,
        queue: Optional[QueueRef] = None,
        max_number_of_messages: int = DEFAULT_MAX_NUMBER_OF_MESSAGES,
        visibility_timeout: Optional[int] = None,
        attribute_name: Union[str, Sequence[str], None] = None,
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        """
        Receive up to max_number_of_messages messages.

        The outcome carries a list of Message, empty when the queue had
        nothing to deliver.
        Several attribute names expand to AttributeName.1, AttributeName.2
        and so on.
        """
        if not queue:
            raise ConfigurationError("no target queue specified")

        queue_url = _queue_url(queue)
        options = dict(
            params,
            action="ReceiveMessage",
            queue=queue,
            max_number_of_messages=max_number_of_messages,
            visibility_timeout=visibility_timeout,
            attribute_name=attribute_name,
            callbacks=callbacks
        )
        return self.dispatcher.submit(
            options,
            transform=lambda response: Message.parse_list(response.content, queue_url=queue_url)
        )

    def delete_message(
        self,
        message: Optional[Message] = None,
        queue: Optional[QueueRef] = None,
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        """Delete a received message by its receipt handle."""
        if not message:
            raise ConfigurationError("no message specified")

        queue = queue or message.queue_url
        if not queue:
            raise ConfigurationError("no target queue specified")

        options = dict(
            params,
            action="DeleteMessage",
            queue=queue,
            receipt_handle=message.receipt_handle,
            callbacks=callbacks
        )
        return self.dispatcher.submit(options)

    # Permission operations

    def add_permission(
        self,
        queue: Optional[QueueRef] = None,
        permissions: Union[Permission, Sequence[Permission], None] = None,
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        """
        Grant permissions on a queue.

        Grants expand to AWSAccountId.N / ActionName.N in order; when
        labels differ the last one is sent.
        """
        if not queue:
            raise ConfigurationError("no target queue specified")
        grants = self._permission_list(permissions)

        options = dict(
            params,
            action="AddPermission",
            queue=queue,
            permissions=grants,
            callbacks=callbacks
        )
        return self.dispatcher.submit(options)

    def remove_permission(
        self,
        queue: Optional[QueueRef] = None,
        permissions: Union[Permission, Sequence[Permission], None] = None,
        callbacks: Optional[Callbacks] = None,
        **params: Any
    ) -> "asyncio.Task[Outcome]":
        """
        Revoke the permission identified by the last grant's label.

        Only the Label is sent. The grants' account_id and action_name
        fields are ignored; the service removes every grant under that
        label.
        """
        if not queue:
            raise ConfigurationError("no target queue specified")
        grants = self._permission_list(permissions)

        options = dict(
            params,
            action="RemovePermission",
            queue=queue,
            label=grants[-1].label,
            callbacks=callbacks
        )
        return self.dispatcher.submit(options)

    @staticmethod
    def _permission_list(
        permissions: Union[Permission, Sequence[Permission], None]
    ) -> List[Permission]:
        if isinstance(permissions, Permission):
            permissions = [permissions]
        if not permissions:
            raise ConfigurationError("no permissions objects specified")
        for permission in permissions:
            if not isinstance(permission, Permission):
                raise ConfigurationError("permissions must be Permission instances")
        return list(permissions)

    # Not implemented

    def change_message_visibility(self, *args: Any, **kwargs: Any) -> "asyncio.Task[Outcome]":
        raise NotImplementedOperationError("ChangeMessageVisibility")

    def set_queue_attributes(self, *args: Any, **kwargs: Any) -> "asyncio.Task[Outcome]":
        raise NotImplementedOperationError("SetQueueAttributes")

    def send_message(self, *args: Any, **kwargs: Any) -> "asyncio.Task[Outcome]":
        raise NotImplementedOperationError("SendMessage")
