"""Input validation helpers."""

from __future__ import annotations

import math
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from habitkit.core.errors import ValidationError

M = TypeVar("M", bound=BaseModel)


def validate_payload(schema: Type[M], data: Any) -> M:
    """Validate ``data`` against a pydantic schema, raising the core ValidationError."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data or {})
    except SchemaError as exc:
        raise ValidationError(details=_clean_errors(exc)) from exc


def require_number(value: Any, field: str = "value") -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be finite")
    return number


def _clean_errors(exc: SchemaError) -> list[Dict[str, Any]]:
    # ctx may hold exception objects that do not serialise to JSON
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
