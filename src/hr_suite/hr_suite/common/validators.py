from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_text(value: Any, field_name: str) -> str:
    """Stripped text; None counts as empty, anything but a string is refused."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters long")
    return value


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email.lower()


def parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def parse_date(value: Any, field_name: str) -> Optional[date]:
    """Accept ``date``/``datetime`` objects or ``YYYY-MM-DD`` strings; empty means None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_amount(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return amount


def parse_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < 1:
        raise ValidationError(f"{field_name} must be at least 1")
    return number


def string_list(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list of strings")
    return tuple(str(v).strip() for v in value if str(v).strip())


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
