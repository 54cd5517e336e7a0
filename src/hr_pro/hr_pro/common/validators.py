from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise one ValidationError listing every missing/blank field."""
    missing = [f for f in fields if data.get(f) is None or not str(data.get(f)).strip()]
    if missing:
        raise ValidationError("Campos obrigatórios em falta: " + ", ".join(missing))


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_int(value, field_name)


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f"{field_name} inválida (AAAA-MM-DD)")


def optional_decimal(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} inválido")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} inválido")
    return amount
