"""Security scan status for a site."""

from __future__ import annotations

from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr

from wpcom_remote.core.enums import UnknownCaseEnum
from wpcom_remote.core.exceptions import FetchError
from wpcom_remote.core.types import Result
from wpcom_remote.resources.registry import resource
from wpcom_remote.transport.base import ApiVersion

from .base import SiteRemote, WireDateTime, WireModel


class JetpackScanState(UnknownCaseEnum):
    IDLE = "idle"
    SCANNING = "scanning"
    UNAVAILABLE = "unavailable"
    PROVISIONING = "provisioning"
    UNKNOWN = "unknown"


class JetpackScanThreatStatus(UnknownCaseEnum):
    CURRENT = "current"
    FIXED = "fixed"
    IGNORED = "ignored"
    UNKNOWN = "unknown"


class JetpackScanStatus(WireModel):
    """Progress of a running scan, or the outcome of a finished one."""

    is_initial: StrictBool
    start_date: WireDateTime | None = Field(default=None, alias="timestamp")
    # 0 - 100
    progress: StrictInt
    # seconds
    duration: StrictInt | StrictFloat | None = None
    # only reported for past scans
    did_fail: StrictBool | None = Field(default=None, alias="error")


class JetpackScanThreat(WireModel):
    threat_id: StrictInt = Field(alias="id")
    signature: StrictStr
    description: StrictStr | None = None
    status: JetpackScanThreatStatus
    first_detected: WireDateTime | None = None


class JetpackScanCredentials(WireModel):
    """A limited view of the stored credentials for one role."""

    credential_type: StrictStr = Field(alias="type")
    role: StrictStr
    still_valid: StrictBool


@resource("sites/{site_id}/scan", version=ApiVersion.V2)
class JetpackScan(WireModel):
    state: JetpackScanState
    # set while a scan is running
    current: JetpackScanStatus | None = None
    # None while a scan is running
    most_recent: JetpackScanStatus | None = None
    # during a scan these are the previous scan's threats
    threats: tuple[JetpackScanThreat, ...] | None = None
    credentials: tuple[JetpackScanCredentials, ...] | None = None

    @property
    def is_enabled(self) -> bool:
        """Whether scanning is available.

        Both an explicitly unavailable and an unrecognized state count as not
        enabled; `state` still tells the two apart.
        """
        return self.state not in (JetpackScanState.UNAVAILABLE, JetpackScanState.UNKNOWN)


class ScanRemote(SiteRemote):
    async def get_scan(self) -> Result[JetpackScan, FetchError]:
        """Fetch the site's current scan state."""
        return await self.fetcher.fetch(JetpackScan, self.site_id)
