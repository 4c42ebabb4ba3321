from datetime import datetime
from decimal import Decimal

import pytest

from payroll_app.exceptions import InvalidState, NotFound, ValidationFailure
from payroll_app.extensions import db
from payroll_app.models.payroll_models import SalaryRecord
from payroll_app.salary_service import PayrollService, validate_period, validate_salary_inputs
from payroll_app.store import SalaryRecordStore


@pytest.fixture
def service(ctx):
    return PayrollService()


def periods(records):
    return [r.period for r in records]


# ------------------------
# create / update
# ------------------------

def test_create_derives_tax_percent_and_totals(service, employee):
    record = service.create_or_update(employee.id, 3, 2024, "50000", allowances="22500", deductions="6275")

    assert record.id is not None
    assert record.processed is False
    assert record.tax_percent == Decimal("20")
    assert record.gross_salary == Decimal("72500.00")
    assert record.tax_amount == Decimal("14500.00")
    assert record.net_salary == Decimal("51725.00")


def test_explicit_tax_percent_is_kept(service, employee):
    record = service.create_or_update(employee.id, 3, 2024, 50000, 0, 0, tax_percent="12.5")

    assert record.tax_percent == Decimal("12.50")
    assert record.tax_amount == Decimal("6250.00")


def test_zero_bracket_scenario(service, employee):
    record = service.create_or_update(employee.id, 4, 2024, 20000, allowances=9500, deductions=3850)

    assert record.tax_percent == Decimal("0")
    assert record.net_salary == Decimal("25650.00")


def test_resubmitting_a_period_updates_in_place(service, employee):
    first = service.create_or_update(employee.id, 3, 2024, 50000, 22500, 6275)
    first.updated_at = datetime(2020, 1, 1)
    db.session.commit()
    first_id, created_at = first.id, first.created_at

    second = service.create_or_update(employee.id, 3, 2024, 60000, 0, 1000)

    assert second.id == first_id
    assert second.created_at == created_at
    assert second.updated_at > datetime(2020, 1, 1)
    assert second.basic_salary == Decimal("60000.00")
    assert second.gross_salary == Decimal("60000.00")
    assert service.record_count(employee.id) == 1


def test_same_inputs_twice_store_one_identical_record(service, employee):
    service.create_or_update(employee.id, 3, 2024, 50000, 22500, 6275)
    record = service.create_or_update(employee.id, 3, 2024, 50000, 22500, 6275)

    assert service.record_count(employee.id) == 1
    assert record.net_salary == Decimal("51725.00")


def test_unknown_employee_is_rejected(service, ctx):
    with pytest.raises(NotFound):
        service.create_or_update(999, 3, 2024, 50000)
    assert SalaryRecord.query.count() == 0


@pytest.mark.parametrize("kwargs, field", [
    (dict(month=13, year=2024, basic_salary=1000), "month"),
    (dict(month=0, year=2024, basic_salary=1000), "month"),
    (dict(month=3, year=1800, basic_salary=1000), "year"),
    (dict(month=3, year=2024, basic_salary=-1), "basic_salary"),
    (dict(month=3, year=2024, basic_salary=1000, allowances=-5), "allowances"),
    (dict(month=3, year=2024, basic_salary=1000, deductions="lots"), "deductions"),
    (dict(month=3, year=2024, basic_salary=1000, tax_percent=150), "tax_percent"),
    (dict(month=3, year=2024, basic_salary=None), "basic_salary"),
    (dict(month=3, year=2024, basic_salary=Decimal("NaN")), "basic_salary"),
    (dict(month=3, year=2024, basic_salary=Decimal("sNaN")), "basic_salary"),
    (dict(month=3, year=2024, basic_salary=1000, deductions=Decimal("Infinity")), "deductions"),
    (dict(month=3, year=2024, basic_salary=1000, tax_percent=Decimal("NaN")), "tax_percent"),
    (dict(month=3, year=2024, basic_salary="99999999.99", allowances="0.01"), "allowances"),
])
def test_invalid_input_is_rejected_before_storage(service, employee, kwargs, field):
    with pytest.raises(ValidationFailure) as excinfo:
        service.create_or_update(employee.id, **kwargs)

    assert field in excinfo.value.errors
    assert service.record_count(employee.id) == 0


def test_validation_runs_before_employee_lookup(service, ctx):
    with pytest.raises(ValidationFailure):
        service.create_or_update(999, 13, 2024, 1000)


def test_monetary_inputs_are_rounded_to_cents():
    values = validate_salary_inputs("100.005", "0.104", None)

    assert values["basic_salary"] == Decimal("100.01")
    assert values["allowances"] == Decimal("0.10")
    assert values["deductions"] == Decimal("0.00")
    assert values["tax_percent"] is None


def test_gross_may_reach_the_column_limit():
    values = validate_salary_inputs("99999999.98", "0.01")

    assert values["basic_salary"] + values["allowances"] == Decimal("99999999.99")


def test_validate_period_accepts_numeric_strings():
    assert validate_period("3", "2024") == (3, 2024)


class LateSightStore(SalaryRecordStore):
    """Misses the existing row once, as a concurrent writer would."""

    def __init__(self):
        self.missed = False

    def find_by_employee_and_period(self, employee_id, month, year):
        if not self.missed:
            self.missed = True
            return None
        return super().find_by_employee_and_period(employee_id, month, year)


def test_losing_the_insert_race_turns_into_an_update(service, employee):
    existing = service.create_or_update(employee.id, 3, 2024, 50000)
    existing_id = existing.id

    racing = PayrollService(store=LateSightStore())
    record = racing.create_or_update(employee.id, 3, 2024, 70000)

    assert record.id == existing_id
    assert record.basic_salary == Decimal("70000.00")
    assert service.record_count(employee.id) == 1


def test_processed_record_can_still_be_edited(service, employee):
    record = service.create_or_update(employee.id, 3, 2024, 50000)
    service.mark_processed(record.id)

    updated = service.create_or_update(employee.id, 3, 2024, 55000)

    assert updated.processed is True
    assert updated.basic_salary == Decimal("55000.00")


# ------------------------
# reads
# ------------------------

def test_history_is_most_recent_first(service, employee):
    for month, year in [(1, 2024), (12, 2023), (3, 2024)]:
        service.create_or_update(employee.id, month, year, 10000)

    assert periods(service.get_history(employee.id)) == [(3, 2024), (1, 2024), (12, 2023)]


def test_history_of_employee_without_records_is_empty(service, employee):
    assert service.get_history(employee.id) == []


def test_history_page(service, employee):
    for month in range(1, 6):
        service.create_or_update(employee.id, month, 2024, 10000)

    page = service.get_history_page(employee.id, page=2, per_page=2)

    assert page.total == 5
    assert periods(page.items) == [(3, 2024), (2, 2024)]


def test_get_by_period_not_found_carries_the_key(service, employee):
    with pytest.raises(NotFound) as excinfo:
        service.get_by_period(employee.id, 5, 2024)

    assert excinfo.value.context == {"employee_id": employee.id, "month": 5, "year": 2024}
    assert excinfo.value.status_code == 404


def test_period_and_year_listings(service, employee, other_employee):
    service.create_or_update(other_employee.id, 3, 2024, 10000)
    service.create_or_update(employee.id, 3, 2024, 20000)
    service.create_or_update(employee.id, 7, 2024, 20000)
    service.create_or_update(employee.id, 3, 2023, 20000)

    by_period = service.get_all_by_period(3, 2024)
    assert [r.employee_id for r in by_period] == sorted([employee.id, other_employee.id])

    assert [r.month for r in service.get_all_by_year(2024)] == [7, 3, 3]
    assert service.get_all_by_period(8, 2024) == []


def test_get_salary_unknown_id(service, ctx):
    with pytest.raises(NotFound):
        service.get_salary(12345)


# ------------------------
# delete / process
# ------------------------

def test_delete_unprocessed_record(service, employee):
    record = service.create_or_update(employee.id, 3, 2024, 50000)

    service.delete(record.id)

    assert service.record_count(employee.id) == 0


def test_delete_processed_record_is_refused(service, employee):
    record = service.create_or_update(employee.id, 3, 2024, 50000)
    service.mark_processed(record.id)

    with pytest.raises(InvalidState) as excinfo:
        service.delete(record.id)

    assert excinfo.value.message == "Cannot delete processed salary record"
    assert service.record_count(employee.id) == 1


def test_delete_unknown_record(service, ctx):
    with pytest.raises(NotFound):
        service.delete(42)


def test_mark_processed_is_idempotent(service, employee):
    record = service.create_or_update(employee.id, 3, 2024, 50000)

    first = service.mark_processed(record.id)
    stamp = first.updated_at
    second = service.mark_processed(record.id)

    assert second.processed is True
    assert second.updated_at == stamp


def test_process_period_and_unprocessed_listing(service, employee, other_employee):
    a = service.create_or_update(employee.id, 3, 2024, 50000)
    service.create_or_update(other_employee.id, 3, 2024, 30000)
    later = service.create_or_update(employee.id, 4, 2024, 50000)
    service.mark_processed(a.id)

    assert len(service.unprocessed_records()) == 2
    assert service.process_period(3, 2024) == 1
    assert service.process_period(3, 2024) == 0
    assert [r.id for r in service.unprocessed_records()] == [later.id]


def test_store_existence_check(service, employee):
    store = SalaryRecordStore()
    assert store.exists_by_employee_and_period(employee.id, 3, 2024) is False

    service.create_or_update(employee.id, 3, 2024, 50000)

    assert store.exists_by_employee_and_period(employee.id, 3, 2024) is True
    assert store.exists_by_employee_and_period(employee.id, 4, 2024) is False
