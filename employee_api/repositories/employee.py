"""
Acceso a datos de empleados.

EmployeeStore define el contrato (alta, lectura, actualización, baja, búsqueda);
SqlEmployeeStore lo implementa sobre una Session de SQLAlchemy prestada por request.
"""
import logging
from abc import ABC, abstractmethod
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from employee_api.errors import StoreError
from employee_api.models import Employee
from employee_api.schemas import NormalizedEmployee

logger = logging.getLogger(__name__)


class EmployeeStore(ABC):
    @abstractmethod
    def get_all_employees(self) -> list[Employee]: ...

    @abstractmethod
    def get_employee_by_id(self, employee_id: int) -> Employee | None: ...

    @abstractmethod
    def create_employee(self, employee: NormalizedEmployee) -> Employee: ...

    @abstractmethod
    def create_employees(self, batch: list[NormalizedEmployee]) -> list[Employee]: ...

    @abstractmethod
    def update_employee(self, employee_id: int, employee: NormalizedEmployee) -> bool: ...

    @abstractmethod
    def delete_employee(self, employee_id: int) -> bool: ...

    @abstractmethod
    def search_employees(self, query: str) -> list[Employee]: ...


def _store_error(exc: SQLAlchemyError) -> StoreError:
    if isinstance(exc, IntegrityError):
        return StoreError("constraint")
    if isinstance(exc, (OperationalError, InterfaceError)):
        return StoreError("connectivity")
    return StoreError("unknown")


def _to_row(employee: NormalizedEmployee) -> Employee:
    return Employee(
        first_name=employee.first_name,
        last_name=employee.last_name,
        phone=employee.phone,
        zip=employee.zip,
        hire_date=employee.hire_date,
    )


class SqlEmployeeStore(EmployeeStore):
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, exc: SQLAlchemyError, operation: str) -> StoreError:
        self.db.rollback()
        err = _store_error(exc)
        logger.exception("store_error", extra={"operation": operation, "kind": err.kind})
        return err

    def get_all_employees(self) -> list[Employee]:
        try:
            return list(self.db.scalars(select(Employee).order_by(Employee.id)))
        except SQLAlchemyError as e:
            raise self._fail(e, "get_all") from e

    def get_employee_by_id(self, employee_id: int) -> Employee | None:
        try:
            return self.db.get(Employee, employee_id)
        except SQLAlchemyError as e:
            raise self._fail(e, "get_by_id") from e

    def create_employee(self, employee: NormalizedEmployee) -> Employee:
        emp = _to_row(employee)
        try:
            self.db.add(emp)
            self.db.commit()
            self.db.refresh(emp)
        except SQLAlchemyError as e:
            raise self._fail(e, "create") from e
        logger.info("employee_created", extra={"employee_id": emp.id, "hire_date": employee.hire_date_text})
        return emp

    def create_employees(self, batch: list[NormalizedEmployee]) -> list[Employee]:
        """Alta en lote: una sola transacción, se guardan todas las filas o ninguna."""
        emps = [_to_row(e) for e in batch]
        try:
            self.db.add_all(emps)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(e, "create_batch") from e
        logger.info("employees_created", extra={"count": len(emps)})
        return emps

    def update_employee(self, employee_id: int, employee: NormalizedEmployee) -> bool:
        try:
            emp = self.db.get(Employee, employee_id)
            if emp is None:
                return False
            emp.first_name = employee.first_name
            emp.last_name = employee.last_name
            emp.phone = employee.phone
            emp.zip = employee.zip
            emp.hire_date = employee.hire_date
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(e, "update") from e
        logger.info("employee_updated", extra={"employee_id": employee_id})
        return True

    def delete_employee(self, employee_id: int) -> bool:
        try:
            emp = self.db.get(Employee, employee_id)
            if emp is None:
                return False
            self.db.delete(emp)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(e, "delete") from e
        logger.info("employee_deleted", extra={"employee_id": employee_id})
        return True

    def search_employees(self, query: str) -> list[Employee]:
        term = query.strip()
        stmt = (
            select(Employee)
            .where(or_(
                Employee.last_name.icontains(term, autoescape=True),
                Employee.phone.icontains(term, autoescape=True),
            ))
            .order_by(Employee.id)
        )
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as e:
            raise self._fail(e, "search") from e
