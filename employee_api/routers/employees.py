# employee_api/routers/employees.py
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from employee_api.core.config import get_request_settings, Settings
from employee_api.db import get_db
from employee_api.errors import (
    NOT_FOUND_MESSAGE,
    NO_RESULTS_MESSAGE,
    SEARCH_PARAM_REQUIRED_MESSAGE,
)
from employee_api.models import Employee
from employee_api.repositories.employee import EmployeeStore, SqlEmployeeStore
from employee_api.schemas import DataEnvelope, EmployeeIn, EmployeeOut, Envelope
from employee_api.services.normalization import prepare_for_create, prepare_for_update

router = APIRouter()

def get_employee_store(db: Session = Depends(get_db)) -> EmployeeStore:
    return SqlEmployeeStore(db)

# -------- helpers de respuesta --------
def _dump(emp: Employee | None) -> dict | None:
    if emp is None:
        return None
    return EmployeeOut.model_validate(emp).model_dump(by_alias=True, mode="json")

def _envelope(status_code: int, message: str, succeeded: bool, **extra) -> JSONResponse:
    if extra:
        body = DataEnvelope(message=message, succeeded=succeeded, **extra)
    else:
        body = Envelope(message=message, succeeded=succeeded)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

def _failure(settings: Settings, kind: str, message: str) -> JSONResponse:
    return _envelope(settings.status_for(kind), message, False)

def _read_result(settings: Settings, data, message: str, succeeded: bool = True):
    if settings.WRAP_READ_RESPONSES:
        return _envelope(200, message, succeeded, data=data)
    return data

# -------- lectura --------
@router.get("/employees", tags=["Employees"], summary="Listar empleados")
def get_all_employees(
    store: EmployeeStore = Depends(get_employee_store),
    settings: Settings = Depends(get_request_settings),
):
    employees = [_dump(e) for e in store.get_all_employees()]
    return _read_result(settings, employees, f"{len(employees)} employees found")

# debe declararse antes de /employees/{id}
@router.get("/employees/search", tags=["Employees"], summary="Buscar por apellido o teléfono")
def search_employees(
    param: str | None = Query(None, description="Apellido o teléfono (coincidencia parcial)"),
    store: EmployeeStore = Depends(get_employee_store),
    settings: Settings = Depends(get_request_settings),
):
    if param is None or not param.strip():
        return _failure(settings, "search_param_required", SEARCH_PARAM_REQUIRED_MESSAGE)
    employees = [_dump(e) for e in store.search_employees(param)]
    if not employees:
        return _failure(settings, "no_results", NO_RESULTS_MESSAGE)
    return _read_result(settings, employees, f"{len(employees)} employees found")

@router.get("/employees/{id}", tags=["Employees"], summary="Obtener empleado por id")
def get_employee_by_id(
    id: int,
    store: EmployeeStore = Depends(get_employee_store),
    settings: Settings = Depends(get_request_settings),
):
    emp = _dump(store.get_employee_by_id(id))
    if emp is None:
        return _read_result(settings, None, NOT_FOUND_MESSAGE, succeeded=False)
    return _read_result(settings, emp, "Employee found")

# -------- escritura --------
@router.post("/employees", tags=["Employees"], summary="Crear empleado")
def create_employee(
    employee: EmployeeIn,
    store: EmployeeStore = Depends(get_employee_store),
):
    normalized = prepare_for_create(employee)
    created = store.create_employee(normalized)
    return _envelope(200, "Employee created successfully", True, data=_dump(created))

@router.put("/employees/{id}", tags=["Employees"], summary="Reemplazar empleado")
def update_employee(
    id: int,
    employee: EmployeeIn,
    store: EmployeeStore = Depends(get_employee_store),
    settings: Settings = Depends(get_request_settings),
):
    normalized = prepare_for_update(employee)
    if not store.update_employee(id, normalized):
        return _failure(settings, "not_found", NOT_FOUND_MESSAGE)
    return _envelope(200, "Employee updated successfully", True)

@router.delete("/employees/{id}", tags=["Employees"], summary="Eliminar empleado")
def delete_employee(
    id: int,
    store: EmployeeStore = Depends(get_employee_store),
    settings: Settings = Depends(get_request_settings),
):
    if not store.delete_employee(id):
        return _failure(settings, "not_found", NOT_FOUND_MESSAGE)
    return _envelope(200, "Employee deleted successfully", True)
