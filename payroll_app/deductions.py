# payroll_app/deductions.py
from collections import namedtuple
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# (annual upper bound inclusive, percent)
TAX_BRACKETS = (
    (Decimal("250000"), Decimal("0")),
    (Decimal("500000"), Decimal("5")),
    (Decimal("1000000"), Decimal("20")),
)
TOP_BRACKET_PERCENT = Decimal("30")

SalaryBreakdown = namedtuple("SalaryBreakdown", ["gross", "tax_amount", "net"])


def to_decimal(value, field_name="amount") -> Decimal:
    """
    Coerce user/DB input to Decimal without going through binary floats.
    - None -> 0
    - float -> via str() so 0.1 stays 0.1
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be numeric")
    if isinstance(value, Decimal):
        result = value
    else:
        if isinstance(value, float):
            value = str(value)
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"{field_name} must be numeric")
    # NaN / sNaN / Infinity
    if not result.is_finite():
        raise ValueError(f"{field_name} must be numeric")
    return result


def quantize_money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# ------------------------
# Income tax (simplified slab table)
# ------------------------
def annual_tax_percent(annual_salary) -> Decimal:
    """
    Slab lookup on an annual figure, upper bounds inclusive:
    - <= 250,000: 0%
    - <= 500,000: 5%
    - <= 1,000,000: 20%
    - above: 30%
    """
    annual_salary = to_decimal(annual_salary, "annual_salary")
    for upper_bound, percent in TAX_BRACKETS:
        if annual_salary <= upper_bound:
            return percent
    return TOP_BRACKET_PERCENT


def tax_percent_for(basic_monthly_salary) -> Decimal:
    """Flat tax percentage for a monthly basic salary (annualised as basic x 12)."""
    return annual_tax_percent(to_decimal(basic_monthly_salary, "basic_salary") * 12)


# ------------------------
# Gross / tax / net
# ------------------------
def compute_salary(basic_salary, allowances=0, deductions=0, tax_percent=0) -> SalaryBreakdown:
    """
    gross = basic + allowances
    tax   = gross * tax% / 100, rounded half-up to the cent
    net   = gross - tax - deductions
    """
    gross = quantize_money(to_decimal(basic_salary, "basic_salary") + to_decimal(allowances, "allowances"))
    tax_amount = (gross * to_decimal(tax_percent, "tax_percent") / HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)
    net = quantize_money(gross - tax_amount - to_decimal(deductions, "deductions"))
    return SalaryBreakdown(gross=gross, tax_amount=tax_amount, net=net)


def total_deductions(tax_amount, deductions) -> Decimal:
    """Tax plus other deductions, as printed on the payslip."""
    return quantize_money(to_decimal(tax_amount) + to_decimal(deductions))
