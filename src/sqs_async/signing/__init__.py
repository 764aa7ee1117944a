"""
Package: signing
Description: Parameter canonicalization and Signature Version 2 signing.
"""

from .canonical import canonical_query_string, encode, expand_params, wire_key
from .signer import QuerySigner, string_to_sign

__all__ = [
    "QuerySigner",
    "canonical_query_string",
    "encode",
    "expand_params",
    "string_to_sign",
    "wire_key",
]
