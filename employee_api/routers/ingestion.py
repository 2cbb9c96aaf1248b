import io
import logging
import pandas as pd
from fastapi import APIRouter, UploadFile, File, Depends, HTTPException
from employee_api.errors import ValidationError
from employee_api.repositories.employee import EmployeeStore
from employee_api.routers.employees import get_employee_store
from employee_api.schemas import EmployeeIn, ImportResult, NormalizedEmployee, RejectedRow
from employee_api.services.normalization import prepare_for_create

router = APIRouter()
MAX_IMPORT_ROWS = 1000
logger = logging.getLogger(__name__)

# -------- utilidades --------
READ_CSV_KW = dict(
    dtype=str,
    keep_default_na=False,
    na_values=["", " ", "NA", "NaN", "nan", "NULL", "Null", "None", "none"],
)
REQUIRED_COLUMNS = ["firstName", "lastName", "phone", "zip", "hireDate"]

def _read_csv_upload(file: UploadFile) -> pd.DataFrame:
    raw = file.file.read()
    try:
        return pd.read_csv(io.BytesIO(raw), **READ_CSV_KW)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=422, detail=f"CSV inválido: {e}") from None

def _validate_frame(df: pd.DataFrame) -> None:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise HTTPException(status_code=422, detail=f"Faltan columnas {missing}")
    if len(df) == 0:
        raise HTTPException(status_code=422, detail="El CSV no tiene filas")
    if len(df) > MAX_IMPORT_ROWS:
        raise HTTPException(status_code=422, detail=f"El CSV debe tener entre 1 y {MAX_IMPORT_ROWS} filas")

def _cell(value) -> str | None:
    """NaN/None -> None; todo lo demás como str sin tocar."""
    if value is None or pd.isna(value):
        return None
    return str(value)

def import_employees(df: pd.DataFrame, store: EmployeeStore) -> ImportResult:
    valid: list[NormalizedEmployee] = []
    rejected: list[RejectedRow] = []
    for idx, row in df.iterrows():
        raw = EmployeeIn.model_validate({c: _cell(row.get(c)) for c in REQUIRED_COLUMNS})
        try:
            valid.append(prepare_for_create(raw))
        except ValidationError as e:
            rejected.append(RejectedRow(row_index=int(idx), reason=e.message))
            logger.info("reject_row", extra={"row_index": int(idx), "reason": e.kind})
    # una sola transacción: si el store falla no queda ninguna fila escrita
    if valid:
        store.create_employees(valid)
    return ImportResult(rows=len(df), created=len(valid), rejected=rejected)

@router.post("/employees/import/csv", tags=["Ingestion"], summary="Carga masiva de empleados (multipart)")
def import_employees_csv(
    file: UploadFile = File(...),
    store: EmployeeStore = Depends(get_employee_store),
):
    df = _read_csv_upload(file)
    _validate_frame(df)
    result = import_employees(df, store)
    logger.info("import_done", extra={"rows": result.rows, "created_count": result.created})
    return result.model_dump(by_alias=True)
