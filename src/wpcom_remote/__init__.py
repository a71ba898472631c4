"""Typed client for the WordPress.com REST API."""

import importlib.metadata
import logging

from wpcom_remote.client import WpcomRemote, create_remote
from wpcom_remote.config import FrozenConfig, ResolvedConfig, resolve_config
from wpcom_remote.core.enums import StatsPeriodUnit, UnknownCaseEnum
from wpcom_remote.core.exceptions import (
    ChainLegError,
    ConfigurationError,
    DecodingFailure,
    FetchError,
    TransportError,
    WpcomRemoteError,
)
from wpcom_remote.core.types import Failure, ResourceRequest, Result, Success
from wpcom_remote.fetch import (
    ChainedFetch,
    ChainState,
    ChainStep,
    TypedFetcher,
    deliver,
    fetch_composite,
)
from wpcom_remote.resources import (
    DEFAULT_REGISTRY,
    DescriptorRegistry,
    ResourceDescriptor,
    TimeStatsDescriptor,
    insight,
    resource,
    time_stats,
)
from wpcom_remote.services import (
    FeatureFlag,
    FeatureFlagList,
    FeatureFlagRemote,
    JetpackScan,
    JetpackScanState,
    PlanRemote,
    RemotePlanDetail,
    RemotePlanList,
    ScanRemote,
    StatsAllTimesInsight,
    StatsCommentsInsight,
    StatsLastPostInsight,
    StatsRemote,
    StatsTopPostsTimeIntervalData,
)
from wpcom_remote.telemetry import InMemoryReporter, TelemetryContext, TelemetryReporter
from wpcom_remote.transport import ApiVersion, HttpClient, HttpxClient

try:
    __version__ = importlib.metadata.version("wpcom-remote")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Avoid 'No handler found' warnings when the consuming app has no logging set up.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Entry points
    "WpcomRemote",
    "create_remote",
    # Fetching
    "TypedFetcher",
    "ChainedFetch",
    "ChainStep",
    "ChainState",
    "fetch_composite",
    "deliver",
    # Resource descriptors
    "ResourceDescriptor",
    "TimeStatsDescriptor",
    "DescriptorRegistry",
    "DEFAULT_REGISTRY",
    "resource",
    "insight",
    "time_stats",
    # Core types
    "Result",
    "Success",
    "Failure",
    "ResourceRequest",
    "StatsPeriodUnit",
    "UnknownCaseEnum",
    # Transport
    "HttpClient",
    "HttpxClient",
    "ApiVersion",
    # Configuration
    "FrozenConfig",
    "ResolvedConfig",
    "resolve_config",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    "InMemoryReporter",
    # Remotes and models
    "StatsRemote",
    "StatsAllTimesInsight",
    "StatsCommentsInsight",
    "StatsLastPostInsight",
    "StatsTopPostsTimeIntervalData",
    "ScanRemote",
    "JetpackScan",
    "JetpackScanState",
    "FeatureFlagRemote",
    "FeatureFlag",
    "FeatureFlagList",
    "PlanRemote",
    "RemotePlanDetail",
    "RemotePlanList",
    # Exceptions
    "WpcomRemoteError",
    "ConfigurationError",
    "FetchError",
    "TransportError",
    "DecodingFailure",
    "ChainLegError",
]
