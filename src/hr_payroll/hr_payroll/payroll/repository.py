from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import SalaryRecord


class SalaryRepository(Protocol):
    """Storage boundary for salary records.

    Implementations must enforce one record per (employee_id, year, month).
    ``save`` inserts when ``record.salary_id`` is 0, otherwise updates.
    """

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def find_for_period(self, *, employee_id: int, year: int, month: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_all(self, *, employee_id: Optional[int] = None) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def save(self, record: SalaryRecord) -> int:
        raise NotImplementedError

    def set_payment_status(self, salary_id: int, *, status: PaymentStatus, payment_date: Optional[date]) -> bool:
        raise NotImplementedError

    def delete(self, salary_id: int) -> bool:
        raise NotImplementedError
