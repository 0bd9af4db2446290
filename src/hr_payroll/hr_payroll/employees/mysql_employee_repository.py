from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeFields
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, emp_code, username, email, password_hash, first_name, last_name, role,
    contact_no, department_id, designation, date_of_joining, is_active, address,
    bank_name, bank_account_number, ifsc_code, basic_salary, hra, allowance
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        emp_code=row["emp_code"],
        username=row["username"],
        email=row.get("email") or "",
        password_hash=row["password_hash"],
        first_name=row["first_name"],
        last_name=row.get("last_name") or "",
        role=Role(row["role"]),
        contact_no=row.get("contact_no"),
        department_id=row.get("department_id"),
        designation=row.get("designation"),
        date_of_joining=row.get("date_of_joining"),
        is_active=bool(row.get("is_active", True)),
        address=row.get("address"),
        bank_name=row.get("bank_name"),
        bank_account_number=row.get("bank_account_number"),
        ifsc_code=row.get("ifsc_code"),
        basic_salary=Decimal(row.get("basic_salary") or 0),
        hra=Decimal(row.get("hra") or 0),
        allowance=Decimal(row.get("allowance") or 0),
    )


def _field_params(fields: EmployeeFields) -> tuple:
    return (
        fields.first_name,
        fields.last_name,
        fields.email,
        fields.contact_no,
        fields.department_id,
        fields.designation,
        fields.date_of_joining,
        int(fields.is_active),
        fields.address,
        fields.bank_name,
        fields.bank_account_number,
        fields.ifsc_code,
        fields.basic_salary,
        fields.hra,
        fields.allowance,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_username(self, username: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def create_employee(
        self,
        *,
        emp_code: str,
        username: str,
        password_hash: str,
        role: Role,
        fields: EmployeeFields,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    emp_code, username, password_hash, role,
                    first_name, last_name, email, contact_no, department_id, designation,
                    date_of_joining, is_active, address, bank_name, bank_account_number,
                    ifsc_code, basic_salary, hra, allowance
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (emp_code, username, password_hash, role.value) + _field_params(fields),
            )
            return int(cur.lastrowid)

    def update_employee(self, employee_id: int, *, fields: EmployeeFields, password_hash: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, email=%s, contact_no=%s, department_id=%s,
                    designation=%s, date_of_joining=%s, is_active=%s, address=%s, bank_name=%s,
                    bank_account_number=%s, ifsc_code=%s, basic_salary=%s, hra=%s, allowance=%s
                WHERE employee_id=%s
                """,
                _field_params(fields) + (int(employee_id),),
            )
            updated = cur.rowcount > 0
            if password_hash:
                cur.execute(
                    "UPDATE employees SET password_hash=%s WHERE employee_id=%s",
                    (password_hash, int(employee_id)),
                )
            return updated

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s WHERE employee_id=%s",
                (int(is_active), int(employee_id)),
            )
            return cur.rowcount > 0

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        where = "WHERE is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees {where} ORDER BY employee_id DESC")
            return [_to_employee(r) for r in fetchall(cur)]
