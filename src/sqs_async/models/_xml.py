"""Namespace-agnostic helpers over xml.etree for Query API response bodies."""

import xml.etree.ElementTree as ET
from typing import Iterator, Optional, Union

from ..errors import ResponseParseError


def parse_document(body: Union[str, bytes]) -> ET.Element:
    if isinstance(body, str):
        body = body.encode("utf-8")
    if not body or not body.strip():
        raise ResponseParseError("empty response body")
    try:
        return ET.fromstring(body)
    except ET.ParseError as e:
        raise ResponseParseError(f"malformed response body: {e}") from e


def local_name(element: ET.Element) -> str:
    tag = element.tag
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def iter_named(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield every descendant (or self) whose local tag name is name."""
    for node in element.iter():
        if local_name(node) == name:
            yield node


def child_text(element: ET.Element, name: str) -> Optional[str]:
    """Text of the first direct child named name, or None."""
    for child in element:
        if local_name(child) == name:
            return child.text or ""
    return None


def expect_root(root: ET.Element, *names: str) -> None:
    if local_name(root) not in names:
        raise ResponseParseError(
            f"unexpected response document '{local_name(root)}', expected {' or '.join(names)}"
        )
