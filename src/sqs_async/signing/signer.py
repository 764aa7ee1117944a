"""
Module: signer.py
Description: Signature Version 2 request signer.

Merges the protocol defaults with an operation's parameters, builds the
canonical request description and appends the keyed-hash signature to
the canonical query string.

Key Components:
- QuerySigner: Holds credentials and protocol defaults, signs requests
- string_to_sign(): Canonical request description
- SIGNATURE_DIGESTS: Supported SignatureMethod values

Dependencies: hashlib, hmac, base64, httpx, typing
"""

import base64
import hashlib
import hmac
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from ..config.regions import DEFAULT_PROTOCOL, ProtocolDefaults
from ..errors import ConfigurationError
from ..utils.logger import get_logger
from .canonical import canonical_query_string, encode, expand_params

module_logger = get_logger(__name__)

EXPIRES_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DEFAULT_EXPIRES_IN = 30 * 60

SIGNATURE_DIGESTS: Dict[str, Callable[..., Any]] = {
    "HmacSHA256": hashlib.sha256,
    "HmacSHA1": hashlib.sha1,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def string_to_sign(method: str, host: str, path: str, query: str) -> str:
    """
    Build the canonical request description.

    Exactly four newline-joined lines: upper-cased method, lower-cased
    host, request path and canonical query string.
    """
    return "\n".join([method.upper(), host.lower(), path or "/", query])


class QuerySigner:
    """
    Request signer for Signature Version 2.

    Attributes:
        access_key: Access key id sent as AWSAccessKeyId
        protocol: Protocol defaults merged under every request
        expires_in: Seconds until a signed request expires
        logger: Receives override warnings and signing debug events
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        protocol: ProtocolDefaults = DEFAULT_PROTOCOL,
        expires_in: int = DEFAULT_EXPIRES_IN,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[Any] = None
    ):
        self.access_key = access_key
        self._secret_key = secret_key
        self.protocol = protocol
        self.expires_in = expires_in
        self._clock = clock or _utcnow
        self.logger = logger if logger is not None else module_logger

    def default_params(self) -> Dict[str, str]:
        """Protocol defaults plus credentials and a fresh Expires timestamp."""
        expires = (self._clock() + timedelta(seconds=self.expires_in)).astimezone(timezone.utc)
        params = self.protocol.as_params()
        params["AWSAccessKeyId"] = self.access_key
        params["Expires"] = expires.strftime(EXPIRES_FORMAT)
        return params

    def merge_params(self, options: Mapping[str, Any]) -> Dict[str, str]:
        """
        Merge operation options over the default parameters.

        Options win on collision. Overriding a protocol parameter is
        allowed but logged, and the merged result must still name a
        supported signature version and method.

        Raises:
            ConfigurationError: If the merged protocol parameters are unusable
        """
        defaults = self.default_params()
        params = dict(defaults)
        params.update(expand_params(options))

        for name, default in self.protocol.as_params().items():
            if params[name] != default:
                self.logger.warning(
                    "Protocol parameter overridden",
                    parameter=name,
                    default=default,
                    value=params[name]
                )

        if params["SignatureVersion"] != "2":
            raise ConfigurationError(
                f"unsupported SignatureVersion '{params['SignatureVersion']}', only '2' can be signed"
            )
        if params["SignatureMethod"] not in SIGNATURE_DIGESTS:
            raise ConfigurationError(
                f"unsupported SignatureMethod '{params['SignatureMethod']}' "
                f"(supported: {', '.join(SIGNATURE_DIGESTS)})"
            )
        return params

    def signature(self, description: str, signature_method: str) -> str:
        """
        Compute the encoded signature of a request description.

        Raises:
            ConfigurationError: If no secret key is configured
        """
        if not self._secret_key:
            raise ConfigurationError("no secret key configured, cannot sign request")

        digest = hmac.new(
            key=self._secret_key.encode("utf-8"),
            msg=description.encode("utf-8"),
            digestmod=SIGNATURE_DIGESTS[signature_method]
        ).digest()
        return encode(base64.b64encode(digest).decode("ascii").rstrip())

    def sign(self, endpoint: str, options: Mapping[str, Any], method: str = "GET") -> str:
        """
        Build the signed query string for a request.

        Args:
            endpoint: Queue URL or scheme://host the request is sent to
            options: Operation parameters, including Action
            method: HTTP method named in the request description

        Returns:
            Canonical query string with '&Signature=...' appended last

        Raises:
            ConfigurationError: If credentials or protocol parameters are unusable
        """
        if not self.access_key:
            raise ConfigurationError("no access key configured, cannot sign request")

        url = httpx.URL(endpoint)
        host = url.host if url.port is None else f"{url.host}:{url.port}"
        path = url.raw_path.decode("ascii").split("?", 1)[0] or "/"

        params = self.merge_params(options)
        query = canonical_query_string(params)
        description = string_to_sign(method, host, path, query)
        signature = self.signature(description, params["SignatureMethod"])

        self.logger.debug("Request signed", action=params.get("Action"), host=host, path=path)
        return f"{query}&Signature={signature}"
