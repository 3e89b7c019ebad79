from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.constants import MONEY_MAX_DIGITS
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
TWO_PLACES = Decimal("0.01")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; 1.9 must not truncate to 1
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def parse_money(value: Any, field_name: str) -> Decimal:
    """Parse a decimal string (or int) into a 2-place Decimal.

    Floats are refused: money crosses the boundary as strings.
    """

    if isinstance(value, float) or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a decimal string")
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a valid amount")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} is not a valid amount")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    try:
        rounded = amount.quantize(TWO_PLACES)
    except InvalidOperation:
        raise ValidationError(f"{field_name} is too large")
    if rounded != amount:
        raise ValidationError(f"{field_name} allows at most 2 decimal places")
    amount = rounded
    if len(amount.as_tuple().digits) > MONEY_MAX_DIGITS:
        raise ValidationError(f"{field_name} is too large")
    return amount


def parse_iso_date(value: Any, field_name: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    text = require_non_empty(value, field_name)
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def parse_period(value: Any, field_name: str = "period") -> str:
    text = require_non_empty(value, field_name)
    if not _PERIOD_RE.match(text):
        raise ValidationError(f"{field_name} must be YYYY-MM")
    return text


def parse_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def optional_email(value: Any) -> Optional[str]:
    email = optional_text(value)
    if email is not None and not _EMAIL_RE.match(email):
        raise ValidationError("email is not valid")
    return email
