"""Remote feature flags for a device.

The endpoint answers with a JSON object mapping flag titles to booleans.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ConfigDict, RootModel, StrictBool, TypeAdapter

from wpcom_remote.core.exceptions import FetchError
from wpcom_remote.core.types import Result
from wpcom_remote.fetch.fetcher import TypedFetcher
from wpcom_remote.resources.registry import resource
from wpcom_remote.transport.base import ApiVersion

from .base import WireModel

_flag_values = TypeAdapter(dict[str, StrictBool])


class FeatureFlag(WireModel):
    title: str
    value: bool


def _decode_flags(raw: Mapping[str, Any]) -> FeatureFlagList:
    values = _flag_values.validate_python(raw)
    return FeatureFlagList(
        tuple(FeatureFlag(title=title, value=value) for title, value in sorted(values.items()))
    )


@resource("mobile/feature-flags", version=ApiVersion.V2, decoder=_decode_flags)
class FeatureFlagList(RootModel[tuple[FeatureFlag, ...]]):
    """Flags ordered by title."""

    model_config = ConfigDict(frozen=True)

    def __iter__(self) -> Iterator[FeatureFlag]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> FeatureFlag:
        return self.root[index]

    @property
    def dictionary_value(self) -> dict[str, bool]:
        """The flags in their wire shape."""
        return {flag.title: flag.value for flag in self.root}


class FeatureFlagRemote:
    def __init__(self, fetcher: TypedFetcher) -> None:
        self.fetcher = fetcher

    async def get_remote_feature_flags(
        self, device_id: str
    ) -> Result[FeatureFlagList, FetchError]:
        """Fetch the flags that apply to ``device_id``."""
        return await self.fetcher.fetch(FeatureFlagList, device_id=device_id)
