from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee, EmployeeFields


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Employee]:
        raise NotImplementedError

    def create_employee(
        self,
        *,
        emp_code: str,
        username: str,
        password_hash: str,
        role: Role,
        fields: EmployeeFields,
    ) -> int:
        raise NotImplementedError

    def update_employee(self, employee_id: int, *, fields: EmployeeFields, password_hash: Optional[str] = None) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        raise NotImplementedError
