"""Resource descriptors and the registry that dispatches on result type."""

from .descriptor import ResourceDescriptor, TimeStatsDescriptor
from .registry import (
    DEFAULT_REGISTRY,
    DescriptorRegistry,
    insight,
    resource,
    time_stats,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "DescriptorRegistry",
    "ResourceDescriptor",
    "TimeStatsDescriptor",
    "insight",
    "resource",
    "time_stats",
]
