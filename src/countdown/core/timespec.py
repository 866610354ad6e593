"""TimeSpec — validated hours/minutes/seconds durations."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

_FIELD_BOUNDS = (("hours", 23), ("minutes", 59), ("seconds", 59))

_Number = Union[int, Decimal]

_MAX_SHOWN = 10**6


class ErrorKind(Enum):
    """Why a field was rejected."""

    OUT_OF_RANGE = "out_of_range"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class FieldError:
    """A single rejected field."""

    field: str
    kind: ErrorKind
    message: str


class ValidationError(ValueError):
    """Raised when one or more time fields are rejected.

    ``errors`` holds one :class:`FieldError` per offending field, in
    hours/minutes/seconds order.
    """

    def __init__(self, errors: tuple[FieldError, ...]) -> None:
        self.errors = errors
        super().__init__("; ".join(e.message for e in errors))

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(e.field for e in self.errors)


@dataclass(frozen=True)
class TimeSpec:
    """An immutable duration whose fields are always within bounds.

    Construction checks the fields directly (plain ints only); use
    :func:`validate` for raw input such as edit-field text.
    """

    hours: int
    minutes: int
    seconds: int

    def __post_init__(self) -> None:
        errors = []
        for (field, upper), raw in zip(_FIELD_BOUNDS, (self.hours, self.minutes, self.seconds)):
            is_int = isinstance(raw, int) and not isinstance(raw, bool)
            error = _check_field(field, upper, raw, raw if is_int and raw >= 0 else None)
            if error is not None:
                errors.append(error)
        if errors:
            raise ValidationError(tuple(errors))

    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds


def validate(hours: object, minutes: object, seconds: object) -> TimeSpec:
    """Validate a raw (hours, minutes, seconds) triple.

    Values may be ints, floats, Decimals or text straight from an edit
    field.  Every offending field is reported in the raised
    :class:`ValidationError`; nothing is clamped.
    """
    errors: list[FieldError] = []
    values: list[int] = []
    for (field, upper), raw in zip(_FIELD_BOUNDS, (hours, minutes, seconds)):
        value = _coerce(raw)
        error = _check_field(field, upper, raw, value)
        if error is not None:
            errors.append(error)
        else:
            values.append(int(value))

    if errors:
        raise ValidationError(tuple(errors))
    return TimeSpec(*values)


def format_hms(total_seconds: int) -> str:
    """Format *total_seconds* as zero-padded ``HH:MM:SS``."""
    if total_seconds < 0:
        raise ValueError(f"total_seconds must be non-negative, got {total_seconds}")
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _check_field(
    field: str, upper: int, raw: object, value: Optional[_Number]
) -> Optional[FieldError]:
    """Return the error for one field, or ``None`` if *value* is in bounds.

    *value* is the coerced non-negative whole number, ``None`` when *raw*
    could not be read as one.
    """
    if value is None:
        return FieldError(
            field,
            ErrorKind.MALFORMED,
            f"{field.capitalize()} must be a whole number from 0 to {upper}, got {raw!r}",
        )
    if value > upper:
        # Huge ints cannot always be rendered with str().
        shown = value if value < _MAX_SHOWN else "a larger number"
        return FieldError(
            field,
            ErrorKind.OUT_OF_RANGE,
            f"{field.capitalize()} must be between 0 and {upper}, got {shown}",
        )
    return None


def _coerce(raw: object) -> Optional[_Number]:
    """Return *raw* as a non-negative whole number, or ``None`` if it is malformed.

    Integral inputs come back as ``int``; text, floats and Decimals come
    back as an integral ``Decimal`` so huge values never go through
    ``int()``'s digit limit.
    """
    # bool is an int subclass but never a sensible field value.
    if isinstance(raw, bool):
        return None
    if isinstance(raw, numbers.Integral):
        value = int(raw)
        return value if value >= 0 else None

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    elif isinstance(raw, (float, Decimal)):
        number = Decimal(raw)
    else:
        return None

    if not number.is_finite() or number != number.to_integral_value() or number < 0:
        return None
    return number


DEFAULT_SPEC = TimeSpec(hours=0, minutes=5, seconds=0)
