"""
Module: canonical.py
Description: Parameter canonicalization for Signature Version 2.

Turns an operation's option mapping into the sorted, percent-encoded
query string that is both signed and sent.

Key Components:
- encode(): Percent-encoding with the unreserved character set
- wire_key(): snake_case option names to the wire's CamelCase names
- expand_params(): Compound option values to indexed parameters
- canonical_query_string(): Sort, encode and join

Dependencies: urllib.parse, typing
"""

import re
from typing import Any, Dict, Mapping, Protocol, Tuple, runtime_checkable
from urllib.parse import quote

from ..errors import ConfigurationError

# Acronyms the wire format keeps upper-case inside parameter names
_WIRE_ACRONYMS = {"aws": "AWS", "md5": "MD5", "id": "Id"}
_SNAKE_KEY = re.compile(r"^[a-z0-9_]+$")


@runtime_checkable
class ParamExpander(Protocol):
    """A compound option that expands into several indexed parameters."""

    def to_params(self, ordinal: int) -> Dict[str, str]:
        ...


def encode(value: str) -> str:
    """
    Percent-encode a parameter name or value.

    Alphanumerics and '-', '_', '.', '~' pass through; every other
    character, including space, '+', '/' and '=', is %XX encoded from
    its UTF-8 bytes with upper-case hex digits.
    """
    return quote(value, safe="-_.~")


def wire_key(key: str) -> str:
    """
    Normalize an option name to the wire casing convention.

    'queue_name' becomes 'QueueName' and 'aws_account_id' becomes
    'AWSAccountId'. Names that are not snake_case ('Label',
    'AWSAccountId.1') are already in wire form and pass through.
    """
    if not _SNAKE_KEY.match(key):
        return key
    return "".join(
        _WIRE_ACRONYMS.get(part, part.capitalize())
        for part in key.split("_")
        if part
    )


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def expand_params(options: Mapping[str, Any]) -> Dict[str, str]:
    """
    Expand compound values and normalize keys to wire form.

    A value with to_params(ordinal), or a list of such values, is
    replaced by the parameters it expands to; ordinals start at 1.
    A list of plain values becomes Name.1, Name.2 and so on. Later
    expansions overwrite earlier ones on key collision. None values
    and empty lists are dropped.

    Raises:
        ConfigurationError: If a list mixes expanders and plain values
    """
    params: Dict[str, str] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, ParamExpander):
            params.update(value.to_params(1))
        elif isinstance(value, (list, tuple)):
            expanders = [isinstance(item, ParamExpander) for item in value]
            if all(expanders):
                for ordinal, item in enumerate(value, start=1):
                    params.update(item.to_params(ordinal))
            elif any(expanders):
                raise ConfigurationError(f"option '{key}' mixes compound and plain values")
            else:
                name = wire_key(key)
                for ordinal, item in enumerate(value, start=1):
                    params[f"{name}.{ordinal}"] = _format_value(item)
        else:
            params[wire_key(key)] = _format_value(value)
    return params


def _sort_key(item: Tuple[str, str]) -> bytes:
    name, _ = item
    return name.encode("utf-8")


def canonical_query_string(params: Mapping[str, str]) -> str:
    """
    Build the canonical query string.

    Parameters are sorted byte-wise by name (not locale-aware), then
    each name and value is encoded and the pairs joined with '&'.
    """
    return "&".join(
        f"{encode(name)}={encode(value)}"
        for name, value in sorted(params.items(), key=_sort_key)
    )
