from __future__ import annotations

from decimal import Decimal

from ...core.constants import HALF_DAY_FACTOR
from ...core.exceptions import ValidationError
from .base import PayrollCalculator, PayrollInputs, PayrollResult, to_currency


class StandardPayrollCalculator(PayrollCalculator):
    """Pro-rated pay with a PF deduction on basic.

    gross    = basic + hra + allowance
    per_day  = gross / total_working_days
    earned   = present * per_day + half * per_day * 0.5
    pf       = basic * pf_percentage / 100
    net      = earned - deduction - pf
    """

    def calculate(self, inputs: PayrollInputs) -> PayrollResult:
        if int(inputs.total_working_days) < 1:
            raise ValidationError("Total working days must be at least 1")

        basic = Decimal(inputs.basic)
        deduction = Decimal(inputs.deduction)

        gross = basic + Decimal(inputs.hra) + Decimal(inputs.allowance)
        per_day = gross / Decimal(inputs.total_working_days)
        earned = Decimal(inputs.present_days) * per_day + Decimal(inputs.half_days) * per_day * HALF_DAY_FACTOR
        pf_amount = basic * Decimal(inputs.pf_percentage) / Decimal(100)
        net = earned - deduction - pf_amount

        return PayrollResult(
            gross=to_currency(gross),
            per_day=to_currency(per_day),
            earned=to_currency(earned),
            pf_amount=to_currency(pf_amount),
            deduction=to_currency(deduction),
            total_deduction=to_currency(pf_amount + deduction),
            net_salary=to_currency(net),
        )
