"""Accounting System package.

This package is organized by feature modules (vendors, vouchers, employees,
payroll, reports) with a thin Flask controller layer and SOLID
service/repository layers.
"""
