"""
Serialization helpers for wire/snapshot dictionaries

Stored documents use camelCase keys; Python models use snake_case fields.
Coercion helpers are lenient: bad values become None instead of raising.
"""

import json
from typing import Any, Optional


def snake_to_camel(name: str) -> str:
    """card_gradient_color1 -> cardGradientColor1"""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def as_number(value: Any) -> Optional[float]:
    """Coerce int/float/numeric string to a number; None otherwise (bools rejected)"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None


def as_bool(value: Any) -> Optional[bool]:
    """Coerce bools and 'true'/'false' strings; None otherwise"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return None


def as_text(value: Any) -> Optional[str]:
    """Non-empty string or None"""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def format_number(value: float) -> str:
    """Render 100.0 as '100' and 12.5 as '12.5'"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return format(value, "g") if isinstance(value, float) else str(value)


def dumps_canonical(data: Any) -> str:
    """Deterministic JSON text (sorted keys, compact separators)"""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
