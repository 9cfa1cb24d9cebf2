"""Error values for the replication engine.

Errors are frozen dataclasses returned inside Err, never raised by domain
functions. Base class BarrierEngineError, three @final subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final

from fxbarrier.core.types import UtcDatetime


@dataclass(frozen=True, slots=True)
class BarrierEngineError:
    """Base error value. NOT @final — has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> BarrierEngineError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single field validation failure."""

    path: str  # e.g. "barrier.rebate"
    constraint: str  # e.g. "must be >= 0"
    actual_value: str  # e.g. "-1"


@final
@dataclass(frozen=True, slots=True)
class ValidationError(BarrierEngineError):
    """One or more trade fields failed validation. Returned before replication."""

    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            **BarrierEngineError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


@final
@dataclass(frozen=True, slots=True)
class ConfigurationError(BarrierEngineError):
    """No leg pricer registered for (instrument_kind, currency_pair)."""

    instrument_kind: str
    currency_pair: str

    def to_dict(self) -> dict[str, object]:
        return {
            **BarrierEngineError.to_dict(self),
            "instrument_kind": self.instrument_kind,
            "currency_pair": self.currency_pair,
        }


@final
@dataclass(frozen=True, slots=True)
class UnsupportedBarrierTypeError(BarrierEngineError):
    """Barrier type outside UpIn/UpOut/DownIn/DownOut."""

    barrier_type: str

    def to_dict(self) -> dict[str, object]:
        return {**BarrierEngineError.to_dict(self), "barrier_type": self.barrier_type}


def validation_error(
    source: str, message: str, fields: tuple[FieldViolation, ...],
) -> ValidationError:
    return ValidationError(
        message=message,
        code="INVALID_TRADE",
        timestamp=UtcDatetime.now(),
        source=source,
        fields=fields,
    )
