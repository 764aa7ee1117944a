"""
Module: queue.py
Description: Queue model and queue list parsing.

Parses the QueueUrl elements returned by ListQueues and CreateQueue.
"""

import xml.etree.ElementTree as ET
from typing import List, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._xml import expect_root, iter_named, local_name, parse_document
from ..errors import ResponseParseError


class Queue(BaseModel):
    """
    A queue, identified by its resource URL.

    Attributes:
        queue_url: Full URL of the queue (https://host/account/name)
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    queue_url: str = Field(..., min_length=1, description="Queue resource URL")

    @field_validator('queue_url')
    @classmethod
    def validate_queue_url(cls, v: str) -> str:
        """Validate the queue URL is an absolute HTTP/HTTPS URL."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("queue_url must be a valid HTTP/HTTPS URL")
        return v

    @property
    def path(self) -> str:
        """Path component of the queue URL (/account/name)."""
        return httpx.URL(self.queue_url).path

    @property
    def name(self) -> str:
        """Queue name, the last path segment."""
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @classmethod
    def parse_list(cls, body: Union[str, bytes]) -> List["Queue"]:
        """
        Parse a ListQueues or CreateQueue response.

        Raises:
            ResponseParseError: If the body is not a queue response
        """
        root = parse_document(body)
        expect_root(root, "ListQueuesResponse", "CreateQueueResponse")

        queues = []
        for result in iter_named(root, "ListQueuesResult"):
            queues.extend(cls._from_result(result))
        for result in iter_named(root, "CreateQueueResult"):
            queues.extend(cls._from_result(result))
        return queues

    @classmethod
    def _from_result(cls, result: ET.Element) -> List["Queue"]:
        queues = []
        for node in result:
            if local_name(node) != "QueueUrl":
                continue
            try:
                queues.append(cls(queue_url=node.text or ""))
            except ValueError as e:
                raise ResponseParseError(f"invalid QueueUrl: {node.text!r}") from e
        if not queues and local_name(result) == "CreateQueueResult":
            raise ResponseParseError("CreateQueueResult without QueueUrl")
        return queues
