"""Registry mapping result types to their descriptors.

Descriptors are registered at import time by the class decorators below and
only read afterwards. A result type may be registered once per registry.

    @insight("stats/comments/", parameters={"max": "5"})
    class StatsCommentsInsight(WireModel): ...

    await fetcher.fetch(StatsCommentsInsight, site_id=1)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from wpcom_remote.transport.base import ApiVersion

from .descriptor import ResourceDescriptor, TimeStatsDescriptor

type AnyDescriptor = ResourceDescriptor[Any] | TimeStatsDescriptor[Any]


class DescriptorRegistry:
    """Maps result types to descriptors.

    Lookups follow the result type's MRO, so a subclass of a registered type
    resolves to its parent's descriptor unless it registers its own.
    """

    def __init__(self) -> None:
        self._by_type: dict[type, AnyDescriptor] = {}

    def register(self, descriptor: AnyDescriptor) -> None:
        """Bind ``descriptor`` to its result type.

        Raises:
            ValueError: If the result type already has a descriptor.
        """
        result_type = descriptor.result_type
        if result_type in self._by_type:
            raise ValueError(f"{result_type.__name__} is already registered")
        self._by_type[result_type] = descriptor

    def get(self, result_type: type) -> AnyDescriptor | None:
        """Return the descriptor for ``result_type``, if present."""
        for klass in getattr(result_type, "__mro__", (result_type,)):
            descriptor = self._by_type.get(klass)
            if descriptor is not None:
                return descriptor
        return None

    def __contains__(self, result_type: object) -> bool:
        return isinstance(result_type, type) and self.get(result_type) is not None

    def __len__(self) -> int:
        return len(self._by_type)


DEFAULT_REGISTRY = DescriptorRegistry()


def _default_decoder(cls: type, name: str) -> Callable[..., Any]:
    decoder = getattr(cls, name, None)
    if decoder is None:
        raise TypeError(f"{cls.__name__} must define {name}() or pass decoder=")
    return decoder


def resource[C: type](
    path_template: str,
    *,
    parameters: Mapping[str, str] | None = None,
    version: ApiVersion = ApiVersion.V1_1,
    decoder: Callable[..., Any] | None = None,
    registry: DescriptorRegistry | None = None,
) -> Callable[[C], C]:
    """Class decorator registering a `ResourceDescriptor`.

    Without ``decoder`` the class's ``model_validate`` (pydantic) is used.
    """

    def wrap(cls: C) -> C:
        (registry or DEFAULT_REGISTRY).register(
            ResourceDescriptor(
                result_type=cls,
                path_template=path_template,
                default_parameters=parameters or {},
                version=version,
                decoder=decoder or _default_decoder(cls, "model_validate"),
            )
        )
        return cls

    return wrap


def insight[C: type](
    path_component: str = "stats/",
    *,
    parameters: Mapping[str, str] | None = None,
    registry: DescriptorRegistry | None = None,
) -> Callable[[C], C]:
    """Register a site insight; most insights share the ``stats/`` endpoint."""
    return resource(
        f"sites/{{site_id}}/{path_component}",
        parameters=parameters,
        registry=registry,
    )


def time_stats[C: type](
    path_component: str,
    *,
    registry: DescriptorRegistry | None = None,
) -> Callable[[C], C]:
    """Class decorator registering a `TimeStatsDescriptor`.

    The class must provide ``from_time_stats(raw, period_end_date, period)``.
    """

    def wrap(cls: C) -> C:
        (registry or DEFAULT_REGISTRY).register(
            TimeStatsDescriptor(
                result_type=cls,
                path_template=f"sites/{{site_id}}/{path_component}",
                decoder=_default_decoder(cls, "from_time_stats"),
            )
        )
        return cls

    return wrap
