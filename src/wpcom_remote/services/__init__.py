"""Per-area remotes and the resource models they return.

Importing this package registers every model's descriptor.
"""

from .base import SiteRemote, WireModel
from .feature_flags import FeatureFlag, FeatureFlagList, FeatureFlagRemote
from .plans import PlanRemote, RemotePlanDetail, RemotePlanList
from .scan import (
    JetpackScan,
    JetpackScanCredentials,
    JetpackScanState,
    JetpackScanStatus,
    JetpackScanThreat,
    JetpackScanThreatStatus,
    ScanRemote,
)
from .stats import (
    LastPostSummary,
    PostViews,
    StatsAllTimesInsight,
    StatsCommentsInsight,
    StatsLastPostInsight,
    StatsRemote,
    StatsTopCommentsAuthor,
    StatsTopCommentsPost,
    StatsTopPost,
    StatsTopPostKind,
    StatsTopPostsTimeIntervalData,
)

__all__ = [
    "FeatureFlag",
    "FeatureFlagList",
    "FeatureFlagRemote",
    "JetpackScan",
    "JetpackScanCredentials",
    "JetpackScanState",
    "JetpackScanStatus",
    "JetpackScanThreat",
    "JetpackScanThreatStatus",
    "LastPostSummary",
    "PlanRemote",
    "PostViews",
    "RemotePlanDetail",
    "RemotePlanList",
    "ScanRemote",
    "SiteRemote",
    "StatsAllTimesInsight",
    "StatsCommentsInsight",
    "StatsLastPostInsight",
    "StatsRemote",
    "StatsTopCommentsAuthor",
    "StatsTopCommentsPost",
    "StatsTopPost",
    "StatsTopPostKind",
    "StatsTopPostsTimeIntervalData",
    "WireModel",
]
