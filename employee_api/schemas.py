from datetime import date
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel
from employee_api.core.config import get_settings

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class EmployeeIn(CamelModel):
    """Cuerpo tal como lo envía el cliente; la validación real ocurre en services.normalization."""
    id: int | None = None
    first_name: str | None = None
    last_name:  str | None = None
    phone:      str | None = None
    zip:        str | None = None
    hire_date:  str | None = None

class NormalizedEmployee(CamelModel):
    first_name: str = Field(min_length=1)
    last_name:  str = Field(min_length=1)
    phone:      str = Field(pattern=r"^\(\d{3}\) \d{3}-\d{4}$")
    zip:        str = Field(min_length=1)
    hire_date:  date
    hire_date_text: str

class EmployeeOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    id: int
    first_name: str
    last_name:  str
    phone:      str
    zip:        str
    hire_date:  date

    @field_serializer("hire_date")
    def _format_hire_date(self, value: date) -> str:
        return value.strftime(get_settings().DATE_FORMAT)

class Envelope(BaseModel):
    message: str
    succeeded: bool

class DataEnvelope(Envelope):
    data: Any = None

class RejectedRow(CamelModel):
    row_index: int
    reason: str

class ImportResult(CamelModel):
    rows: int
    created: int
    rejected: list[RejectedRow] = []
