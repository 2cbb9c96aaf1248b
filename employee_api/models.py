from datetime import date
from sqlalchemy import String, Integer, Date, Index
from sqlalchemy.orm import Mapped, mapped_column
from employee_api.db import Base

class Employee(Base):
    __tablename__ = "employees"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False)
    # formato de despliegue: (AAA) PPP-NNNN
    phone: Mapped[str] = mapped_column(String(14), nullable=False)
    zip: Mapped[str] = mapped_column(String(20), nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("ix_employees_last_name", "last_name"),
        Index("ix_employees_phone", "phone"),
    )

    def __repr__(self) -> str:
        return f"Employee(id={self.id!r}, last_name={self.last_name!r})"
