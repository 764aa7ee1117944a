"""
Module: message.py
Description: Message model for ReceiveMessage responses.

Key Components:
- Message: A received message with its receipt handle
- Message.parse_list(): ReceiveMessage response parsing
- Body checksum verification against MD5OfBody

Dependencies: pydantic, hashlib, xml.etree
"""

import hashlib
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ._xml import child_text, expect_root, iter_named, local_name, parse_document
from ..errors import ResponseParseError


class Message(BaseModel):
    """
    A message received from a queue.

    Attributes:
        message_id: Service-assigned message identifier
        receipt_handle: Handle required to delete the message
        md5_of_body: MD5 hex digest of the body as reported by the service
        body: Message body
        attributes: Message attributes requested with AttributeName
        queue_url: Queue the message was received from (if known)
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    message_id: str = Field(..., min_length=1, description="Message identifier")
    receipt_handle: str = Field(..., min_length=1, description="Receipt handle for deletion")
    md5_of_body: Optional[str] = Field(default=None, description="MD5 of the body")
    body: str = Field(default="", description="Message body")
    attributes: Dict[str, str] = Field(default_factory=dict, description="Message attributes")
    queue_url: Optional[str] = Field(default=None, description="Source queue URL")

    @property
    def body_matches_checksum(self) -> bool:
        """Whether the body hashes to the reported MD5OfBody."""
        if self.md5_of_body is None:
            return True
        return hashlib.md5(self.body.encode("utf-8")).hexdigest() == self.md5_of_body.lower()

    @classmethod
    def parse_list(cls, body: Union[str, bytes], queue_url: Optional[str] = None) -> List["Message"]:
        """
        Parse a ReceiveMessage response.

        An empty result (no messages available) parses to an empty list.

        Raises:
            ResponseParseError: If the body is not a ReceiveMessage response
                or a message lacks its id or receipt handle
        """
        root = parse_document(body)
        expect_root(root, "ReceiveMessageResponse")

        messages = []
        for node in iter_named(root, "Message"):
            attributes = {}
            for attribute in node:
                if local_name(attribute) != "Attribute":
                    continue
                name = child_text(attribute, "Name")
                if name:
                    attributes[name] = child_text(attribute, "Value") or ""

            message_id = child_text(node, "MessageId")
            receipt_handle = child_text(node, "ReceiptHandle")
            if not message_id or not receipt_handle:
                raise ResponseParseError("Message without MessageId or ReceiptHandle")

            messages.append(cls(
                message_id=message_id,
                receipt_handle=receipt_handle,
                md5_of_body=child_text(node, "MD5OfBody"),
                body=child_text(node, "Body") or "",
                attributes=attributes,
                queue_url=queue_url
            ))
        return messages
