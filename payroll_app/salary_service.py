# payroll_app/salary_service.py
import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from payroll_app.deductions import quantize_money, tax_percent_for, to_decimal
from payroll_app.exceptions import InvalidState, NotFound, ValidationFailure
from payroll_app.models.payroll_models import SalaryRecord
from payroll_app.store import EmployeeResolver, SalaryRecordStore

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100
# Numeric(10, 2) / Numeric(5, 2) column limits
MAX_AMOUNT = Decimal("99999999.99")
MAX_TAX_PERCENT = Decimal("100")


def _to_int(value, field_name, errors):
    if isinstance(value, bool):
        errors[field_name] = f"{field_name} must be a whole number"
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        errors[field_name] = f"{field_name} must be a whole number"
        return None


def validate_period(month, year):
    """Return (month, year) as ints or raise ValidationFailure."""
    errors = {}
    month_value = _to_int(month, "month", errors)
    year_value = _to_int(year, "year", errors)

    if month_value is not None and not 1 <= month_value <= 12:
        errors["month"] = "month must be between 1 and 12"
    if year_value is not None and not MIN_YEAR <= year_value <= MAX_YEAR:
        errors["year"] = f"year must be between {MIN_YEAR} and {MAX_YEAR}"

    if errors:
        raise ValidationFailure("Invalid payroll period", errors=errors, month=month, year=year)
    return month_value, year_value


def validate_salary_inputs(basic_salary, allowances=0, deductions=0, tax_percent=None):
    """
    Check the monetary inputs of a salary submission.
    Returns a dict of Decimals; tax_percent stays None when it was not given.
    """
    errors = {}
    values = {}

    amounts = (("basic_salary", basic_salary), ("allowances", allowances), ("deductions", deductions))
    for field_name, raw in amounts:
        if raw is None and field_name == "basic_salary":
            errors[field_name] = "Basic salary is required"
            continue
        try:
            value = to_decimal(raw, field_name)
        except ValueError as e:
            errors[field_name] = str(e)
            continue
        if value < 0:
            errors[field_name] = f"{field_name} must not be negative"
        elif value > MAX_AMOUNT:
            errors[field_name] = f"{field_name} must not exceed {MAX_AMOUNT}"
        else:
            values[field_name] = quantize_money(value)

    # gross_salary shares the Numeric(10, 2) limit
    if "basic_salary" in values and "allowances" in values:
        if values["basic_salary"] + values["allowances"] > MAX_AMOUNT:
            errors["allowances"] = f"basic_salary plus allowances must not exceed {MAX_AMOUNT}"

    values["tax_percent"] = None
    if tax_percent is not None:
        try:
            percent = to_decimal(tax_percent, "tax_percent")
        except ValueError as e:
            errors["tax_percent"] = str(e)
        else:
            if not 0 <= percent <= MAX_TAX_PERCENT:
                errors["tax_percent"] = "tax_percent must be between 0 and 100"
            else:
                values["tax_percent"] = quantize_money(percent)

    if errors:
        raise ValidationFailure("Invalid salary input", errors=errors)
    return values


class PayrollService:
    """Create-or-update, lookup and processing of salary records."""

    def __init__(self, store=None, employees=None):
        self.store = store or SalaryRecordStore()
        self.employees = employees or EmployeeResolver()

    # ================= WRITE =================
    def create_or_update(self, employee_id, month, year, basic_salary,
                         allowances=0, deductions=0, tax_percent=None):
        """
        Store the salary for one employee-period.

        Resubmitting the same period overwrites the inputs of the existing
        record in place. When tax_percent is omitted the slab table decides it.
        """
        month, year = validate_period(month, year)
        values = validate_salary_inputs(basic_salary, allowances, deductions, tax_percent)
        if values["tax_percent"] is None:
            values["tax_percent"] = tax_percent_for(values["basic_salary"])

        employee = self.employees.find_employee_by_id(employee_id)

        record = self.store.find_by_employee_and_period(employee.id, month, year)
        if record is None:
            record = self._insert(employee.id, month, year, values)
            if record is not None:
                logger.info("Created salary record %s for employee %s (%s/%s)",
                            record.id, employee.id, month, year)
                return record
            # Lost the insert race on the unique key; update the winner instead.
            record = self.store.find_by_employee_and_period(employee.id, month, year)
            if record is None:
                raise InvalidState(
                    "Salary record could not be stored",
                    employee_id=employee.id, month=month, year=year,
                )

        if record.processed:
            logger.warning("Editing processed salary record %s (%s/%s)", record.id, month, year)

        self._apply(record, values)
        record.updated_at = datetime.utcnow()
        self.store.save(record)
        logger.info("Updated salary record %s for employee %s (%s/%s)",
                    record.id, employee.id, month, year)
        return record

    def _insert(self, employee_id, month, year, values):
        now = datetime.utcnow()
        record = SalaryRecord(
            employee_id=employee_id,
            month=month,
            year=year,
            processed=False,
            created_at=now,
            updated_at=now,
        )
        self._apply(record, values)
        try:
            return self.store.save(record)
        except IntegrityError:
            logger.warning("Concurrent insert for employee %s (%s/%s), retrying as update",
                           employee_id, month, year)
            return None

    @staticmethod
    def _apply(record, values):
        record.apply_inputs(
            values["basic_salary"],
            values.get("allowances", Decimal("0.00")),
            values.get("deductions", Decimal("0.00")),
            values["tax_percent"],
        )

    def delete(self, salary_id):
        record = self.get_salary(salary_id)
        if record.processed:
            logger.warning("Rejected delete of processed salary record %s", salary_id)
            raise InvalidState("Cannot delete processed salary record", salary_id=salary_id)
        self.store.delete(record)
        logger.info("Deleted salary record %s", salary_id)

    def mark_processed(self, salary_id):
        record = self.get_salary(salary_id)
        if record.processed:
            return record
        record.processed = True
        record.updated_at = datetime.utcnow()
        self.store.save(record)
        logger.info("Salary record %s marked as processed", salary_id)
        return record

    def process_period(self, month, year):
        """Mark every unprocessed record of a period as processed; returns how many changed."""
        month, year = validate_period(month, year)
        pending = [r for r in self.store.find_all_by_period(month, year) if not r.processed]
        if not pending:
            return 0
        now = datetime.utcnow()
        for record in pending:
            record.processed = True
            record.updated_at = now
        self.store.save_all(pending)
        logger.info("Processed %s salary records for %s/%s", len(pending), month, year)
        return len(pending)

    # ================= READ =================
    def get_salary(self, salary_id):
        record = self.store.get(salary_id)
        if record is None:
            raise NotFound(f"Salary record not found with id: {salary_id}", salary_id=salary_id)
        return record

    def get_history(self, employee_id):
        return self.store.find_all_by_employee(employee_id)

    def get_history_page(self, employee_id, page=1, per_page=12):
        return self.store.page_by_employee(employee_id, page=page, per_page=per_page)

    def get_by_period(self, employee_id, month, year):
        month, year = validate_period(month, year)
        record = self.store.find_by_employee_and_period(employee_id, month, year)
        if record is None:
            raise NotFound(
                f"Salary record not found for employee {employee_id} in {month}/{year}",
                employee_id=employee_id, month=month, year=year,
            )
        return record

    def get_all_by_period(self, month, year):
        month, year = validate_period(month, year)
        return self.store.find_all_by_period(month, year)

    def get_all_by_year(self, year):
        _, year = validate_period(1, year)
        return self.store.find_all_by_year(year)

    def unprocessed_records(self):
        return self.store.find_by_processed_flag(False)

    def record_count(self, employee_id):
        return self.store.count_by_employee(employee_id)
