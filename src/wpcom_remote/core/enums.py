"""Server enumerations with a forward-compatible fallback.

The server may introduce new states before this client knows about them.
Enumerations deriving from `UnknownCaseEnum` map any unrecognized wire string
to their ``UNKNOWN`` member instead of failing:

    class ScanState(UnknownCaseEnum):
        IDLE = "idle"
        UNKNOWN = "unknown"

    ScanState("idle")      # ScanState.IDLE
    ScanState("rebooting") # ScanState.UNKNOWN

Only strings fall back. A number, list or object where a string is expected
is a shape mismatch and still fails. Absent or null fields are an
optionality concern of the containing model (``ScanState | None``).
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import TYPE_CHECKING, Any, Self

from pydantic_core import core_schema

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler

logger = logging.getLogger(__name__)

UNKNOWN_MEMBER = "UNKNOWN"


class UnknownCaseEnum(str, Enum):
    """String enum whose subclasses must declare an ``UNKNOWN`` member."""

    @classmethod
    def _missing_(cls, value: object) -> Self | None:
        if not isinstance(value, str):
            return None
        unknown = cls.__members__.get(UNKNOWN_MEMBER)
        if unknown is not None:
            logger.debug("Unrecognized %s value %r; using UNKNOWN", cls.__name__, value)
        return unknown

    @classmethod
    def unknown_case(cls) -> Self:
        """Return the fallback member."""
        return cls.__members__[UNKNOWN_MEMBER]

    @classmethod
    def decode(cls, value: Any) -> Self:
        """Decode a wire value, falling back to ``UNKNOWN`` for unknown strings.

        Raises:
            ValueError: If ``value`` is not a string (or a member already).
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(
                f"{cls.__name__} expects a string, got {type(value).__name__}"
            )
        return cls(value)

    @property
    def is_unknown(self) -> bool:
        """True when the wire value was not recognized."""
        return self.name == UNKNOWN_MEMBER

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Bypass pydantic's strict enum validator so the fallback always applies.
        return core_schema.no_info_plain_validator_function(
            cls.decode,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda member: member.value
            ),
        )


class StatsPeriodUnit(str, Enum):
    """Granularity of a time-bucketed stats query.

    Unlike `UnknownCaseEnum`, the set is closed: an unrecognized period echoed
    by the server means the response cannot be interpreted.
    """

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def from_wire(cls, value: object) -> StatsPeriodUnit | None:
        """Return the unit for ``value``, or None when it is not one of the four."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None
