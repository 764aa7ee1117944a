"""
Module: attributes.py
Description: Queue attribute set parsed from GetQueueAttributes.

Attribute values are kept as the strings the service returns; the
typed accessors only convert the counters and timestamps callers
commonly read.
"""

from datetime import datetime, timezone
from typing import Dict, Iterator, Optional, Union

from pydantic import BaseModel, Field

from ._xml import child_text, expect_root, iter_named, parse_document
from ..errors import ResponseParseError


class QueueAttributes(BaseModel):
    """Attribute name to value mapping for one queue."""

    values: Dict[str, str] = Field(default_factory=dict, description="Raw attribute values")

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def names(self) -> Iterator[str]:
        return iter(self.values)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(name, default)

    def _int(self, name: str) -> Optional[int]:
        value = self.values.get(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError as e:
            raise ResponseParseError(f"attribute {name} is not an integer: {value!r}") from e

    @property
    def approximate_number_of_messages(self) -> Optional[int]:
        return self._int("ApproximateNumberOfMessages")

    @property
    def approximate_number_of_messages_not_visible(self) -> Optional[int]:
        return self._int("ApproximateNumberOfMessagesNotVisible")

    @property
    def visibility_timeout(self) -> Optional[int]:
        return self._int("VisibilityTimeout")

    @property
    def created_at(self) -> Optional[datetime]:
        timestamp = self._int("CreatedTimestamp")
        return None if timestamp is None else datetime.fromtimestamp(timestamp, timezone.utc)

    @property
    def last_modified_at(self) -> Optional[datetime]:
        timestamp = self._int("LastModifiedTimestamp")
        return None if timestamp is None else datetime.fromtimestamp(timestamp, timezone.utc)

    @classmethod
    def parse(cls, body: Union[str, bytes]) -> "QueueAttributes":
        """
        Parse a GetQueueAttributes response.

        Raises:
            ResponseParseError: If the body is not a GetQueueAttributes response
        """
        root = parse_document(body)
        expect_root(root, "GetQueueAttributesResponse")

        values = {}
        for attribute in iter_named(root, "Attribute"):
            name = child_text(attribute, "Name")
            if not name:
                raise ResponseParseError("Attribute without Name")
            values[name] = child_text(attribute, "Value") or ""
        return cls(values=values)
