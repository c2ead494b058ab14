"""Typed parsers for multipart form fields."""

from typing import Optional

from khayal.exceptions import ValidationError

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


def parse_form_bool(value: Optional[str], default: bool, field: str) -> bool:
    """Parse a "true"/"false" form value; ``default`` applies when the field was not sent."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValidationError(f"{field} must be 'true' or 'false'")


def parse_form_int(value: Optional[str], default: Optional[int], field: str) -> Optional[int]:
    """Parse an integer form value; empty or missing input yields ``default``."""
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ValidationError(f"{field} must be an integer")


def require_fields(**fields: Optional[str]) -> None:
    """Raise ValidationError naming every blank field."""
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
