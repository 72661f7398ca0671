"""Input validation for DocuSign node parameters.

``validate_field`` is the only gate between host-supplied values and the
request builders; builders assume their input already passed it.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Union
from urllib.parse import urlparse

from docusign_node.exceptions.docusign_exceptions import FieldValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class FieldKind(str, Enum):
    REQUIRED = "required"
    EMAIL = "email"
    UUID = "uuid"
    URL = "url"
    DATE = "date"


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def is_valid_uuid(value: str) -> bool:
    return bool(UUID_PATTERN.match(value))


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_date(value: str) -> bool:
    candidate = value.strip()
    if candidate.endswith(("Z", "z")):
        candidate = f"{candidate[:-1]}+00:00"
    try:
        datetime.fromisoformat(candidate)
    except ValueError:
        return False
    return True


def validate_field(label: str, value: Any, kind: Union[FieldKind, str] = FieldKind.REQUIRED) -> str:
    """Validate one parameter value.

    Args:
        label: Human-readable field name, included in every error message
        value: The value to check
        kind: One of required, email, uuid, url, date

    Returns:
        The value as a string with surrounding whitespace removed

    Raises:
        FieldValidationError: when the value is empty or does not match ``kind``
    """
    kind = FieldKind(kind)

    if _is_empty(value):
        raise FieldValidationError(label, "is required")

    text = str(value).strip()

    if kind == FieldKind.EMAIL and not is_valid_email(text):
        raise FieldValidationError(label, "must be a valid email address", f'{label} must be a valid email address, got "{text}"')
    if kind == FieldKind.UUID and not is_valid_uuid(text):
        raise FieldValidationError(
            label,
            "must be a valid UUID",
            f'{label} must be a valid UUID (xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx), got "{text}"',
        )
    if kind == FieldKind.URL and not is_valid_url(text):
        raise FieldValidationError(label, "must be a valid URL", f'{label} must be a valid http(s) URL, got "{text}"')
    if kind == FieldKind.DATE and not is_valid_date(text):
        raise FieldValidationError(label, "must be a valid ISO 8601 date", f'{label} must be a valid ISO 8601 date, got "{text}"')
    return text
