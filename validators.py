# validators.py — contrôles des champs (prédicats purs + "gates" qui lèvent ValidationError)
from __future__ import annotations
import re
from typing import Any
from urllib.parse import urlsplit

from errors import ValidationError

AUTHOR_MAX = 100
TITLE_MAX = 200
DESCRIPTION_MAX = 500
FOLDER_ID_MAX = 50
FOLDER_NAME_MAX = 100
DIMENSION_MAX = 10000

_FOLDER_ID_RE = re.compile(r"[a-z0-9-]+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.I)


# ─── Prédicats ───────────────────────────────────────────────────────────────
def is_valid_folder_id(value: Any) -> bool:
    return isinstance(value, str) and 0 < len(value) <= FOLDER_ID_MAX and bool(_FOLDER_ID_RE.fullmatch(value))


def is_valid_folder_name(value: Any) -> bool:
    return (isinstance(value, str) and len(value.strip()) > 0
            and len(value) <= FOLDER_NAME_MAX and not _CONTROL_RE.search(value))


def is_valid_text(value: Any, max_length: int, allow_empty: bool = False) -> bool:
    if not isinstance(value, str):
        return False
    trimmed = value.strip()
    if not trimmed and not allow_empty:
        return False
    return len(trimmed) <= max_length and not _CONTROL_RE.search(value)


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:  # entier JSON géant
            return None
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def is_valid_dimension(value: Any) -> bool:
    num = _as_number(value)
    return num is not None and num.is_integer() and 0 < num <= DIMENSION_MAX


def sanitize(value: Any) -> Any:
    # retire les blocs <script>…</script> et les octets NUL (l'échappement reste au rendu)
    if not isinstance(value, str):
        return value
    return _SCRIPT_RE.sub("", value).replace("\0", "")


# ─── Gates ───────────────────────────────────────────────────────────────────
def require_text(field: str, value: Any, max_length: int, allow_empty: bool = False) -> str:
    value = sanitize(value)
    if allow_empty and value is None:
        value = ""
    if not is_valid_text(value, max_length, allow_empty):
        lo = 0 if allow_empty else 1
        raise ValidationError(field, f"Invalid {field}: must be {lo}-{max_length} characters, no control characters")
    return value


def require_url(field: str, value: Any) -> str:
    if not is_valid_url(value):
        raise ValidationError(field, "Invalid URL format: http(s) absolute URL expected")
    return value


def require_dimension(field: str, value: Any) -> int:
    if not is_valid_dimension(value):
        raise ValidationError(field, f"Invalid {field}: must be a positive integer (1-{DIMENSION_MAX})")
    return int(_as_number(value))


def require_folder_id(field: str, value: Any) -> str:
    if not is_valid_folder_id(value):
        raise ValidationError(field, f"Invalid {field}: lowercase alphanumeric with hyphens (1-{FOLDER_ID_MAX} chars)")
    return value


def require_folder_name(field: str, value: Any) -> str:
    value = sanitize(value)
    if not is_valid_folder_name(value):
        raise ValidationError(field, f"Invalid {field}: must be 1-{FOLDER_NAME_MAX} characters, no control characters")
    return value
