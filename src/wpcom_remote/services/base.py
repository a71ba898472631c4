"""Shared pieces for the per-area remotes."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict

from wpcom_remote.core.types import _require
from wpcom_remote.fetch.fetcher import TypedFetcher


def _iso_datetime(value: object) -> object:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO 8601 string, got {type(value).__name__}")
    return datetime.fromisoformat(value)


def _iso_date(value: object) -> object:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO 8601 string, got {type(value).__name__}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        # Some endpoints send a full timestamp where only the day matters.
        return datetime.fromisoformat(value).date()


# Timestamps arrive as ISO 8601 strings only; epoch numbers are a mismatch.
WireDateTime = Annotated[datetime, BeforeValidator(_iso_datetime)]
WireDate = Annotated[date, BeforeValidator(_iso_date)]


class WireModel(BaseModel):
    """Base for models decoded from API responses.

    Immutable, tolerant of extra keys the server adds, and constructible by
    field name as well as by wire alias. Scalar fields use pydantic's strict
    types so a value of the wrong JSON type fails instead of being coerced.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class SiteRemote:
    """Base for remotes scoped to one site."""

    def __init__(self, fetcher: TypedFetcher, site_id: int) -> None:
        _require(
            condition=isinstance(site_id, int) and not isinstance(site_id, bool),
            message="must be an int",
            field_name="site_id",
            exc=TypeError,
        )
        _require(condition=site_id > 0, message="must be positive", field_name="site_id")
        self.fetcher = fetcher
        self.site_id = site_id
