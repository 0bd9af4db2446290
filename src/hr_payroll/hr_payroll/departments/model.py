from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str
    is_active: bool = True

    def as_dict(self) -> dict:
        return {
            "id": self.department_id,
            "name": self.name,
            "status": "active" if self.is_active else "inactive",
            "is_active": self.is_active,
        }
