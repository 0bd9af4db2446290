from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalaryRecord
from .repository import SalaryRepository

_COLUMNS = """
    salary_id, employee_id, year, month, basic_salary, hra, allowance,
    total_working_days, present_days, half_days, absent_days, deduction,
    pf_percentage, pf_amount, net_salary, payment_status, payment_date
"""


def _to_record(r: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        employee_id=int(r["employee_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        basic_salary=Decimal(r["basic_salary"]),
        hra=Decimal(r["hra"]),
        allowance=Decimal(r["allowance"]),
        total_working_days=int(r["total_working_days"]),
        present_days=int(r["present_days"]),
        half_days=int(r["half_days"]),
        absent_days=int(r["absent_days"]),
        deduction=Decimal(r["deduction"]),
        pf_percentage=Decimal(r["pf_percentage"]),
        pf_amount=Decimal(r["pf_amount"]),
        net_salary=Decimal(r["net_salary"]),
        payment_status=PaymentStatus(r["payment_status"]),
        payment_date=r.get("payment_date"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_records WHERE salary_id=%s", (int(salary_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_for_period(self, *, employee_id: int, year: int, month: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_records
                WHERE employee_id=%s AND year=%s AND month=%s
                """,
                (int(employee_id), int(year), int(month)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_all(self, *, employee_id: Optional[int] = None) -> Sequence[SalaryRecord]:
        where = ""
        params: tuple = ()
        if employee_id is not None:
            where = "WHERE employee_id=%s"
            params = (int(employee_id),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_records {where} ORDER BY year DESC, month DESC, salary_id DESC",
                params,
            )
            return [_to_record(r) for r in fetchall(cur)]

    def save(self, record: SalaryRecord) -> int:
        values = (
            record.employee_id,
            record.year,
            record.month,
            record.basic_salary,
            record.hra,
            record.allowance,
            record.total_working_days,
            record.present_days,
            record.half_days,
            record.absent_days,
            record.deduction,
            record.pf_percentage,
            record.pf_amount,
            record.net_salary,
            record.payment_status.value,
            record.payment_date,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if not record.salary_id:
                cur.execute(
                    """
                    INSERT INTO salary_records(
                        employee_id, year, month, basic_salary, hra, allowance,
                        total_working_days, present_days, half_days, absent_days, deduction,
                        pf_percentage, pf_amount, net_salary, payment_status, payment_date
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    values,
                )
                return int(cur.lastrowid)

            cur.execute(
                """
                UPDATE salary_records
                SET employee_id=%s, year=%s, month=%s, basic_salary=%s, hra=%s, allowance=%s,
                    total_working_days=%s, present_days=%s, half_days=%s, absent_days=%s,
                    deduction=%s, pf_percentage=%s, pf_amount=%s, net_salary=%s,
                    payment_status=%s, payment_date=%s
                WHERE salary_id=%s
                """,
                values + (int(record.salary_id),),
            )
            return int(record.salary_id)

    def set_payment_status(self, salary_id: int, *, status: PaymentStatus, payment_date: Optional[date]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE salary_records SET payment_status=%s, payment_date=%s WHERE salary_id=%s",
                (status.value, payment_date, int(salary_id)),
            )
            return cur.rowcount > 0

    def delete(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_records WHERE salary_id=%s", (int(salary_id),))
            return cur.rowcount > 0
