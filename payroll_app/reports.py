# payroll_app/reports.py
from collections import OrderedDict
from decimal import Decimal

from payroll_app.payslip import NO_DEPARTMENT
from payroll_app.salary_service import PayrollService
from payroll_app.utils import format_amount, month_name

TOTAL_FIELDS = ("gross_salary", "tax_amount", "deductions", "net_salary")


def _empty_totals():
    return {field: Decimal("0.00") for field in TOTAL_FIELDS}


def payroll_summary(month, year, service=None):
    """Organization-wide totals for one period, with a per-department breakdown."""
    service = service or PayrollService()
    records = service.get_all_by_period(month, year)

    totals = _empty_totals()
    departments = OrderedDict()
    processed = 0

    for record in records:
        employee = record.employee
        dept_name = employee.department.name if employee and employee.department else NO_DEPARTMENT
        dept = departments.setdefault(dept_name, dict(_empty_totals(), employees=0))
        dept["employees"] += 1
        for field in TOTAL_FIELDS:
            value = getattr(record, field)
            totals[field] += value
            dept[field] += value
        if record.processed:
            processed += 1

    return {
        'month': month,
        'year': year,
        'total_employees': len(records),
        'processed': processed,
        'pending': len(records) - processed,
        'total_gross_salary': totals['gross_salary'],
        'total_tax': totals['tax_amount'],
        'total_other_deductions': totals['deductions'],
        'total_net_salary': totals['net_salary'],
        'departments': [
            dict(values, department=name)
            for name, values in sorted(departments.items())
        ],
    }


def format_summary_for_insights(summary):
    """Plain-text payroll digest used as the prompt body for payroll insights."""
    dept_lines = [
        f"- {d['department']}: {d['employees']} employees, "
        f"gross {format_amount(d['gross_salary'])}, net {format_amount(d['net_salary'])}"
        for d in summary['departments']
    ] or ["- no salary records"]

    lines = [
        f"Payroll period: {month_name(summary['month'])} {summary['year']}",
        f"Employees paid: {summary['total_employees']}",
        f"Processed: {summary['processed']}",
        f"Pending: {summary['pending']}",
        f"Total gross salary: {format_amount(summary['total_gross_salary'])}",
        f"Total tax deducted: {format_amount(summary['total_tax'])}",
        f"Total other deductions: {format_amount(summary['total_other_deductions'])}",
        f"Total net salary: {format_amount(summary['total_net_salary'])}",
        "Department summary:",
    ]
    lines.extend(dept_lines)
    return "\n".join(lines)
