"""
Module: regions.py
Description: Region registry and default protocol parameters.

Both values are immutable and built once; the client receives them at
construction time instead of reading process-wide state.

Key Components:
- Region: A named API endpoint host
- RegionRegistry: Read-only mapping of symbolic region ids to regions
- ProtocolDefaults: API version and signature settings sent with every call

Dependencies: pydantic, types, typing
"""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError

SUPPORTED_SIGNATURE_METHODS = ("HmacSHA256", "HmacSHA1")


class Region(BaseModel):
    """An API endpoint for one region."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Human readable region name")
    host: str = Field(..., min_length=1, description="API hostname for the region")


class RegionRegistry(Mapping[str, Region]):
    """
    Read-only mapping from symbolic region id to Region.

    host() raises ConfigurationError for unknown ids, so a misconfigured
    region fails before any request is built.
    """

    def __init__(self, regions: Mapping[str, Region]):
        if not regions:
            raise ConfigurationError("region registry must contain at least one region")
        self._regions = MappingProxyType(dict(regions))

    def __getitem__(self, key: str) -> Region:
        return self._regions[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def host(self, key: str) -> str:
        """Return the API hostname for a region id."""
        if key not in self._regions:
            known = ", ".join(sorted(self._regions))
            raise ConfigurationError(f"unknown region '{key}' (known: {known})")
        return self._regions[key].host


class ProtocolDefaults(BaseModel):
    """Protocol parameters merged under every request's own parameters."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(default="2009-02-01", description="Query API version")
    signature_version: str = Field(default="2", description="Signature scheme version")
    signature_method: str = Field(default="HmacSHA256", description="Keyed hash used to sign")

    def as_params(self) -> Dict[str, str]:
        """Return the defaults in wire form."""
        return {
            "Version": self.version,
            "SignatureVersion": self.signature_version,
            "SignatureMethod": self.signature_method,
        }


DEFAULT_REGION = "us_east"

DEFAULT_REGIONS = RegionRegistry({
    "us_east": Region(name="US-East (Northern Virginia) Region", host="sqs.us-east-1.amazonaws.com"),
    "us_west": Region(name="US-West (Northern California) Region", host="sqs.us-west-1.amazonaws.com"),
    "eu": Region(name="EU (Ireland) Region", host="sqs.eu-west-1.amazonaws.com"),
    "asia_singapore": Region(name="Asia Pacific (Singapore) Region", host="sqs.ap-southeast-1.amazonaws.com"),
    "asia_tokyo": Region(name="Asia Pacific (Tokyo) Region", host="sqs.ap-northeast-1.amazonaws.com"),
})

DEFAULT_PROTOCOL = ProtocolDefaults()
