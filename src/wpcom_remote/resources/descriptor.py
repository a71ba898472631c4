"""Resource descriptors: how to ask for a result type and how to read it back.

A descriptor binds one result type to an endpoint path template, default
query parameters and a pure decode function. Descriptors are immutable and
hold no runtime state, so a single instance serves every concurrent fetch of
its result type.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import dataclasses
from datetime import date
import logging
import string
from types import MappingProxyType
from typing import Any

from wpcom_remote.core.enums import StatsPeriodUnit
from wpcom_remote.core.types import JSONObject, ResourceRequest, _freeze_mapping
from wpcom_remote.transport.base import ApiVersion, versioned_path

logger = logging.getLogger(__name__)

_formatter = string.Formatter()


def _wire_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class _DescriptorBase[T]:
    result_type: type[T]
    path_template: str
    default_parameters: Mapping[str, str] = dataclasses.field(
        default_factory=lambda: MappingProxyType({})
    )
    version: ApiVersion = ApiVersion.V1_1

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "default_parameters", _freeze_mapping(self.default_parameters)
        )

    @property
    def placeholders(self) -> frozenset[str]:
        """Names substituted into the path template at call time."""
        return frozenset(
            name for _, name, _, _ in _formatter.parse(self.path_template) if name
        )

    def path_for(self, site_id: int | None = None, **path_args: object) -> str:
        """Return the versioned path with identifiers substituted.

        Raises:
            ValueError: If the template needs an identifier that was not given.
        """
        values: dict[str, object] = dict(path_args)
        if site_id is not None:
            values["site_id"] = site_id
        missing = self.placeholders - values.keys()
        if missing:
            raise ValueError(
                f"{self.result_type.__name__} path needs {', '.join(sorted(missing))}"
            )
        return versioned_path(self.path_template.format(**values), self.version)

    def parameters_for(
        self, caller_args: Mapping[str, object] | None = None
    ) -> dict[str, str]:
        """Merge caller arguments over the default query parameters."""
        params = dict(self.default_parameters)
        for key, value in (caller_args or {}).items():
            if value is not None:
                params[key] = _wire_value(value)
        return params

    def request_for(
        self,
        site_id: int | None = None,
        *,
        path_args: Mapping[str, object] | None = None,
        caller_args: Mapping[str, object] | None = None,
    ) -> ResourceRequest:
        """Resolve path and parameters into a request."""
        return ResourceRequest(
            path=self.path_for(site_id, **(path_args or {})),
            parameters=self.parameters_for(caller_args),
        )


def _guarded_decode[T](
    result_type: type[T], raw: Any, decoder: Callable[..., T | None], *args: Any
) -> T | None:
    if not isinstance(raw, Mapping):
        logger.debug(
            "%s expects a JSON object, got %s", result_type.__name__, type(raw).__name__
        )
        return None
    try:
        return decoder(raw, *args)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        logger.debug("Could not decode %s: %s", result_type.__name__, e)
        return None


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class ResourceDescriptor[T](_DescriptorBase[T]):
    """Descriptor for a resource decoded from the response body alone."""

    decoder: Callable[[JSONObject], T | None]

    def decode(self, raw: Any) -> T | None:
        """Decode a response body; None when its shape does not match."""
        return _guarded_decode(self.result_type, raw, self.decoder)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class TimeStatsDescriptor[T](_DescriptorBase[T]):
    """Descriptor for a time-bucketed resource.

    The decoder also receives the period metadata echoed by the server.
    """

    decoder: Callable[[JSONObject, date, StatsPeriodUnit], T | None]

    def decode(self, raw: Any, period_end_date: date, period: StatsPeriodUnit) -> T | None:
        """Decode a response body for the echoed period."""
        return _guarded_decode(self.result_type, raw, self.decoder, period_end_date, period)
