"""
Package: config
Description: Settings, region registry and protocol defaults.
"""

from .regions import (
    DEFAULT_PROTOCOL,
    DEFAULT_REGION,
    DEFAULT_REGIONS,
    ProtocolDefaults,
    Region,
    RegionRegistry,
)
from .settings import Settings

__all__ = [
    "DEFAULT_PROTOCOL",
    "DEFAULT_REGION",
    "DEFAULT_REGIONS",
    "ProtocolDefaults",
    "Region",
    "RegionRegistry",
    "Settings",
]
