"""HR Payroll package.

This package is organized by feature modules (employees, attendance, payroll, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
