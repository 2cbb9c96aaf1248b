"""
Pipeline de validación y normalización previo a escribir en el store.

Los pasos se ejecutan en orden estricto:
  1. campos requeridos (firstName, lastName, phone, zip)
  2. largo del teléfono sobre el valor crudo (10 caracteres)
  3. normalización del teléfono -> (AAA) PPP-NNNN
  4. parseo de hireDate con el patrón mes/día/año
Cualquier fallo levanta ValidationError antes de tocar la base.
"""
import logging
from datetime import date, datetime
from employee_api.core.config import get_settings
from employee_api.errors import ValidationError
from employee_api.schemas import EmployeeIn, NormalizedEmployee

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = [
    ("firstName", "first_name"),
    ("lastName", "last_name"),
    ("phone", "phone"),
    ("zip", "zip"),
]
PHONE_LENGTH = 10

def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()

def missing_fields(raw: EmployeeIn) -> list[str]:
    return [wire for wire, attr in REQUIRED_FIELDS if _is_blank(getattr(raw, attr))]

def normalize_phone(value: str) -> str:
    """'1234567890' -> '(123) 456-7890'. El largo crudo se valida antes de llegar aquí."""
    digits = value.replace("-", "").strip()
    if len(digits) != PHONE_LENGTH or not (digits.isascii() and digits.isdigit()):
        raise ValidationError.invalid_phone_length()
    area, prefix, line = digits[0:3], digits[3:6], digits[6:10]
    return f"({area}) {prefix}-{line}"

def normalize_hire_date(value: str | None, fmt: str | None = None) -> tuple[date, str]:
    """Devuelve (fecha sin hora, texto en el formato del wire)."""
    fmt = fmt or get_settings().DATE_FORMAT
    if value is None:
        raise ValidationError.bad_date_format()
    text = str(value).strip()
    try:
        parsed = datetime.strptime(text, fmt)
    except ValueError:
        raise ValidationError.bad_date_format() from None
    # strptime acepta "2/9/2024"; el patrón es fijo, así que se exige el relleno con ceros
    if parsed.strftime(fmt) != text:
        raise ValidationError.bad_date_format()
    hire_date = parsed.date()
    # solo la porción de fecha, aunque el formato configurado incluya hora
    text = hire_date.strftime(fmt).split()[0]
    return hire_date, text

def prepare_for_create(raw: EmployeeIn) -> NormalizedEmployee:
    missing = missing_fields(raw)
    if missing:
        logger.info("employee rejected: missing fields", extra={"fields": missing})
        raise ValidationError.missing_fields(missing)

    if len(raw.phone) != PHONE_LENGTH:
        logger.info("employee rejected: phone length", extra={"length": len(raw.phone)})
        raise ValidationError.invalid_phone_length()

    phone = normalize_phone(raw.phone)
    hire_date, hire_date_text = normalize_hire_date(raw.hire_date)

    return NormalizedEmployee(
        first_name=raw.first_name,
        last_name=raw.last_name,
        phone=phone,
        zip=raw.zip,
        hire_date=hire_date,
        hire_date_text=hire_date_text,
    )

def prepare_for_update(raw: EmployeeIn) -> NormalizedEmployee:
    """Reemplazo completo: mismas reglas y misma normalización que en el alta."""
    return prepare_for_create(raw)
