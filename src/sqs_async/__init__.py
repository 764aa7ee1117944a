"""
sqs-async: asynchronous client for the queue service Query API.

Signs requests with Signature Version 2, dispatches them through httpx
on the running asyncio loop and routes every response to exactly one
success or failure continuation.
"""

from .config import DEFAULT_PROTOCOL, DEFAULT_REGIONS, ProtocolDefaults, Region, RegionRegistry, Settings
from .errors import (
    ConfigurationError,
    NotImplementedOperationError,
    ResponseParseError,
    ServiceError,
    SQSError,
    TransportError,
)
from .models import Callbacks, Failure, Message, Outcome, Permission, Queue, QueueAttributes, Success
from .sqs_queue import SQSClient

__version__ = "0.1.0"

__all__ = [
    "Callbacks",
    "ConfigurationError",
    "DEFAULT_PROTOCOL",
    "DEFAULT_REGIONS",
    "Failure",
    "Message",
    "NotImplementedOperationError",
    "Outcome",
    "Permission",
    "ProtocolDefaults",
    "Queue",
    "QueueAttributes",
    "Region",
    "RegionRegistry",
    "ResponseParseError",
    "SQSClient",
    "SQSError",
    "ServiceError",
    "Settings",
    "Success",
    "TransportError",
]
