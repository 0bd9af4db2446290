from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import DEFAULT_PF_PERCENTAGE

CENT = Decimal("0.01")


def to_currency(value: Decimal) -> Decimal:
    """Round at the currency boundary only (2 places, half up)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PayrollInputs:
    basic: Decimal
    hra: Decimal
    allowance: Decimal
    total_working_days: int
    present_days: int
    half_days: int
    deduction: Decimal = Decimal("0")
    pf_percentage: Decimal = DEFAULT_PF_PERCENTAGE


@dataclass(frozen=True)
class PayrollResult:
    """Amounts already rounded to 2 decimal places."""

    gross: Decimal
    per_day: Decimal
    earned: Decimal
    pf_amount: Decimal
    deduction: Decimal
    total_deduction: Decimal
    net_salary: Decimal

    def as_dict(self) -> dict:
        return {
            "gross": f"{self.gross:.2f}",
            "per_day": f"{self.per_day:.2f}",
            "earned": f"{self.earned:.2f}",
            "pf_amount": f"{self.pf_amount:.2f}",
            "deduction": f"{self.deduction:.2f}",
            "total_deduction": f"{self.total_deduction:.2f}",
            "net_salary": f"{self.net_salary:.2f}",
        }


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, inputs: PayrollInputs) -> PayrollResult:
        raise NotImplementedError
