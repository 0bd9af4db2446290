"""Example: use the service layer without Flask or MySQL.

Computes one month's pay from attendance counts and prints the slip.
"""

from datetime import date
from decimal import Decimal

from src.hr_payroll.hr_payroll.core.enums import PaymentStatus
from src.hr_payroll.hr_payroll.departments.model import Department
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.payroll.calculator.base import PayrollInputs
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.hr_payroll.hr_payroll.payroll.model import SalaryRecord
from src.hr_payroll.hr_payroll.payroll.slip import SalarySlipFormatter


def main():
    inputs = PayrollInputs(
        basic=Decimal("20000"),
        hra=Decimal("8000"),
        allowance=Decimal("3000"),
        total_working_days=26,
        present_days=22,
        half_days=3,
        deduction=Decimal("500"),
    )
    result = StandardPayrollCalculator().calculate(inputs)
    print(result.as_dict())

    employee = Employee(
        employee_id=1,
        emp_code="EMPJOH0001",
        username="john",
        email="john@example.com",
        password_hash="",
        first_name="John",
        last_name="Doe",
        contact_no="9876543210",
        department_id=2,
        designation="Software Engineer",
    )
    salary = SalaryRecord(
        salary_id=1,
        employee_id=1,
        year=2026,
        month=10,
        basic_salary=inputs.basic,
        hra=inputs.hra,
        allowance=inputs.allowance,
        total_working_days=inputs.total_working_days,
        present_days=inputs.present_days,
        half_days=inputs.half_days,
        absent_days=inputs.total_working_days - inputs.present_days - inputs.half_days,
        deduction=result.deduction,
        pf_percentage=inputs.pf_percentage,
        pf_amount=result.pf_amount,
        net_salary=result.net_salary,
        payment_status=PaymentStatus.PAID,
        payment_date=date(2026, 10, 31),
    )
    print(SalarySlipFormatter().render(salary, employee, Department(2, "Engineering", True)))


if __name__ == "__main__":
    main()
