from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import NOT_AVAILABLE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Department
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_all(self, *, active_only: bool = False) -> Sequence[Department]:
        items = self._departments.list_all()
        if active_only:
            return [d for d in items if d.is_active]
        return list(items)

    def get(self, department_id: int) -> Department:
        dept = self._departments.get_by_id(int(department_id))
        if not dept:
            raise NotFoundError("Department not found")
        return dept

    def name_for(self, department_id: Optional[int]) -> str:
        """Resolve a department name; unknown or deleted departments show as N/A."""

        if not department_id:
            return NOT_AVAILABLE
        dept = self._departments.get_by_id(int(department_id))
        return dept.name if dept else NOT_AVAILABLE

    def _require_unique_name(self, name: str, *, exclude_id: Optional[int] = None) -> None:
        for d in self._departments.list_all():
            if d.name.lower() == name.lower() and d.department_id != exclude_id:
                raise ValidationError("Department name already exists")

    def create(self, *, current_role: Role, name: str, is_active: bool = True) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        name = require_non_empty(name, "Department name")
        self._require_unique_name(name)
        dept_id = self._departments.create(name=name, is_active=bool(is_active))
        logger.info("Created department %s (%s)", dept_id, name)
        return dept_id

    def update(self, *, current_role: Role, department_id: int, name: str, is_active: bool) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        self.get(department_id)
        name = require_non_empty(name, "Department name")
        self._require_unique_name(name, exclude_id=int(department_id))
        self._departments.update(int(department_id), name=name, is_active=bool(is_active))
        logger.info("Updated department %s", department_id)

    def delete(self, *, current_role: Role, department_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        if not self._departments.delete(int(department_id)):
            raise NotFoundError("Department not found")
        logger.info("Deleted department %s", department_id)
