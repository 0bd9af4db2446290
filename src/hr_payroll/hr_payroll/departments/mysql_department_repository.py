from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


def _to_department(r: dict) -> Department:
    return Department(department_id=int(r["department_id"]), name=r["name"], is_active=bool(r.get("is_active", True)))


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT department_id, name, is_active FROM departments ORDER BY name")
            return [_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT department_id, name, is_active FROM departments WHERE department_id=%s",
                (int(department_id),),
            )
            r = fetchone(cur)
            return _to_department(r) if r else None

    def create(self, *, name: str, is_active: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name, is_active) VALUES(%s,%s)", (name, int(is_active)))
            return int(cur.lastrowid)

    def update(self, department_id: int, *, name: str, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, is_active=%s WHERE department_id=%s",
                (name, int(is_active), int(department_id)),
            )
            return cur.rowcount > 0

    def delete(self, department_id: int) -> bool:
        # Employees keep their department_id; it simply stops resolving.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE department_id=%s", (int(department_id),))
            return cur.rowcount > 0
