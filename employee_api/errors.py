# employee_api/errors.py
"""
Errores del dominio.

ValidationError: siempre causado por el cliente (400 por defecto).
StoreError: fallo de la base de datos; nunca expone el detalle interno.
"""

MISSING_FIELDS_PREFIX = "The following fields are required: "
PHONE_LENGTH_MESSAGE = "Phone number must have 10 digits"
BAD_DATE_MESSAGE = "Date sent in wrong format"
SEARCH_PARAM_REQUIRED_MESSAGE = "Param for this search is required"
NO_RESULTS_MESSAGE = "No employees found"
NOT_FOUND_MESSAGE = "Employee not found"
STORE_ERROR_MESSAGE = "Something went wrong, please try again later"


class EmployeeAPIError(Exception):
    kind = "error"

    def __init__(self, message: str, kind: str | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class ValidationError(EmployeeAPIError):
    kind = "model_invalid"

    @classmethod
    def missing_fields(cls, names: list[str]) -> "MissingFields":
        return MissingFields(names)

    @classmethod
    def invalid_phone_length(cls) -> "ValidationError":
        return cls(PHONE_LENGTH_MESSAGE, kind="invalid_phone_length")

    @classmethod
    def bad_date_format(cls) -> "ValidationError":
        return cls(BAD_DATE_MESSAGE, kind="bad_date_format")

    @classmethod
    def model_invalid(cls, detail: str) -> "ValidationError":
        return cls(detail, kind="model_invalid")


class MissingFields(ValidationError):
    kind = "missing_fields"

    def __init__(self, fields: list[str]):
        super().__init__(MISSING_FIELDS_PREFIX + ", ".join(fields))
        self.fields = list(fields)


class StoreError(EmployeeAPIError):
    """kind: connectivity | constraint | not_found | unknown"""
    kind = "unknown"

    def __init__(self, kind: str = "unknown"):
        super().__init__(STORE_ERROR_MESSAGE, kind=kind)
