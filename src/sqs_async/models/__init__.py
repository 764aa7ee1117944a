"""
Package: models
Description: Queue, message, attribute and permission models plus dispatch outcomes.
"""

from .attributes import QueueAttributes
from .message import Message
from .outcome import Callbacks, Failure, Outcome, Success
from .permission import Permission
from .queue import Queue

__all__ = [
    "Callbacks",
    "Failure",
    "Message",
    "Outcome",
    "Permission",
    "Queue",
    "QueueAttributes",
    "Success",
]
