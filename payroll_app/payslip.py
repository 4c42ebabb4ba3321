# payroll_app/payslip.py
"""
Payslip PDF rendering.

The payslip is a fixed A4 layout built with reportlab platypus. Content is
assembled first by ``build_payslip_sections`` (plain strings, easy to
inspect) and only then laid out as flowables, so what is printed is
exactly what the salary record stores. Nothing here recomputes salary
figures.
"""
import io
from collections import namedtuple
from datetime import datetime
from xml.sax.saxutils import escape

from flask import current_app, has_app_context
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from payroll_app.deductions import total_deductions
from payroll_app.utils import format_currency, format_percent, month_name

COMPANY_NAME = "Employee Payroll System"
COMPANY_ADDRESS = "123 Business Street, City, State - 12345"
CURRENCY_SYMBOL = "Rs."
NO_DEPARTMENT = "N/A"
FOOTER_DISCLAIMER = "This is a computer-generated payslip and does not require a signature."

DATE_FORMAT = "%d-%m-%Y"
TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"

TABLE_WIDTH = 495  # A4 width minus the 50pt side margins

# rows are (label, value, emphasized)
PayslipContent = namedtuple(
    "PayslipContent",
    ["company_name", "company_address", "title", "identity",
     "earnings", "deductions", "net_pay", "footer"],
)


def _setting(key, default):
    if has_app_context():
        return current_app.config.get(key, default)
    return default


def payslip_filename(identifier, month, year):
    return f"payslip_{identifier}_{month}_{year}.pdf"


def payslip_title(month, year):
    return f"PAYSLIP — {month_name(month)} {year}"


def build_payslip_sections(record, employee, generated_at=None):
    """Collect every string printed on the payslip, in page order."""
    symbol = _setting("PAYSLIP_CURRENCY_SYMBOL", CURRENCY_SYMBOL)
    generated_at = generated_at or datetime.now()

    def money(amount):
        return format_currency(amount, symbol)

    department = employee.department.name if employee.department else NO_DEPARTMENT
    join_date = employee.date_hired.strftime(DATE_FORMAT) if employee.date_hired else "N/A"

    identity = [
        ("Employee ID:", employee.employee_code, True),
        ("Employee Name:", employee.get_full_name(), False),
        ("Email:", employee.email or "N/A", True),
        ("Department:", department, False),
        ("Join Date:", join_date, True),
    ]
    earnings = [
        ("Basic Salary", money(record.basic_salary), False),
        ("Allowances", money(record.allowances), False),
        ("Gross Salary", money(record.gross_salary), True),
    ]
    deductions = [
        (f"Tax ({format_percent(record.tax_percent)}%)", money(record.tax_amount), False),
        ("Other Deductions", money(record.deductions), False),
        ("Total Deductions", money(total_deductions(record.tax_amount, record.deductions)), True),
    ]
    net_pay = [
        ("Net Pay", money(record.net_salary), True),
    ]
    footer = [
        FOOTER_DISCLAIMER,
        f"Generated on: {generated_at.strftime(TIMESTAMP_FORMAT)}",
    ]

    return PayslipContent(
        company_name=_setting("PAYSLIP_COMPANY_NAME", COMPANY_NAME),
        company_address=_setting("PAYSLIP_COMPANY_ADDRESS", COMPANY_ADDRESS),
        title=payslip_title(record.month, record.year),
        identity=identity,
        earnings=earnings,
        deductions=deductions,
        net_pay=net_pay,
        footer=footer,
    )


# ===============================
# Layout
# ===============================

def _styles():
    styles = getSampleStyleSheet()
    return {
        "company": ParagraphStyle(
            "Company", parent=styles["Heading1"], alignment=TA_CENTER,
            fontSize=18, textColor=colors.darkgrey, spaceAfter=10,
        ),
        "address": ParagraphStyle(
            "Address", parent=styles["Normal"], alignment=TA_CENTER,
            fontSize=10, textColor=colors.grey, spaceAfter=20,
        ),
        "title": ParagraphStyle(
            "PayslipTitle", parent=styles["Heading2"], alignment=TA_CENTER,
            fontSize=16, spaceBefore=15, spaceAfter=20,
        ),
        "section": ParagraphStyle(
            "Section", parent=styles["Heading3"], fontSize=12,
            spaceBefore=10, spaceAfter=10,
        ),
        "footer": ParagraphStyle(
            "Footer", parent=styles["Italic"], alignment=TA_CENTER,
            fontSize=8, textColor=colors.grey,
        ),
    }


def _row_table(rows, right_align_values):
    table = Table(
        [[label, value] for label, value, _ in rows],
        colWidths=[TABLE_WIDTH / 2] * 2,
        hAlign="CENTER",
    )
    commands = [
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("TOPPADDING", (0, 0), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
    ]
    if right_align_values:
        commands.append(("ALIGN", (1, 0), (1, -1), "RIGHT"))
    else:
        commands.append(("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"))

    for index, (_, _, emphasized) in enumerate(rows):
        if emphasized:
            commands.append(("BACKGROUND", (0, index), (-1, index), colors.lightgrey))
            if right_align_values:
                commands.append(("FONTNAME", (0, index), (-1, index), "Helvetica-Bold"))

    table.setStyle(TableStyle(commands))
    return table


def _separator():
    separator = Table([[""]], colWidths=[TABLE_WIDTH])
    separator.setStyle(TableStyle([
        ("LINEBELOW", (0, 0), (-1, -1), 1, colors.darkgrey),
    ]))
    return separator


def render_payslip(record, employee, generated_at=None):
    """Render one salary record as PDF bytes."""
    content = build_payslip_sections(record, employee, generated_at)
    styles = _styles()

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=50,
        leftMargin=50,
        topMargin=40,
        bottomMargin=60,
        title=content.title,
        author=content.company_name,
    )

    elements = [
        Paragraph(escape(content.company_name), styles["company"]),
        Paragraph(escape(content.company_address), styles["address"]),
        _separator(),
        Paragraph(escape(content.title), styles["title"]),
        _row_table(content.identity, right_align_values=False),
        Spacer(1, 20),
        Paragraph("EARNINGS", styles["section"]),
        _row_table(content.earnings, right_align_values=True),
        Spacer(1, 15),
        Paragraph("DEDUCTIONS", styles["section"]),
        _row_table(content.deductions, right_align_values=True),
        Spacer(1, 15),
        Paragraph("NET SALARY", styles["section"]),
        _row_table(content.net_pay, right_align_values=True),
        Spacer(1, 30),
    ]
    elements.extend(Paragraph(escape(line), styles["footer"]) for line in content.footer)

    doc.build(elements)
    return buffer.getvalue()
