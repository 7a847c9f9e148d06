"""Coercion of loosely-typed identifiers into stable string keys.

Rows coming back from the menu tables are schema-loose: ids and category labels
have been seen as numbers, Decimals and nested maps. Everything that keys a
grouping map or an HTML element goes through normalize_to_string first.
"""

import json
import re
from decimal import Decimal
from typing import Any

# Fallback when an object can neither be stringified nor serialized
UNSERIALIZABLE_PLACEHOLDER = "[object]"

_GENERIC_REPR = re.compile(r"^<.+ object at 0x[0-9a-fA-F]+>$")


def _format_decimal(value: Decimal) -> str:
    if value.is_finite() and value == value.to_integral_value():
        return str(int(value))
    if value.is_finite():
        return str(value.normalize())
    return str(value)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return _format_decimal(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if hasattr(value, "__dict__"):
        return vars(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _custom_string(value: Any) -> str | None:
    """Return the value's own __str__ result, or None if it has no meaningful one."""
    if type(value).__str__ is object.__str__:
        return None

    try:
        text = str(value)
    except Exception:  # noqa: BLE001
        return None

    if _GENERIC_REPR.match(text):
        return None
    return text


def normalize_to_string(value: Any) -> str:
    """Coerce any value into a stable string key.

    Args:
        value: Identifier or label as returned by the data layer

    Returns:
        String form of the value; never raises
    """
    if value is None:
        return ""

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, str):
        return value

    if isinstance(value, Decimal):
        return _format_decimal(value)

    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)

    if isinstance(value, int):
        return str(value)

    custom = _custom_string(value)
    if custom is not None:
        return custom

    try:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=_json_default)
    except (TypeError, ValueError, RecursionError):
        return UNSERIALIZABLE_PLACEHOLDER
