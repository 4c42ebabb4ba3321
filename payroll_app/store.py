# payroll_app/store.py
"""
Persistence adapters used by the payroll services.

Every write commits its own transaction; a failed commit is rolled back
and re-raised so the session is usable by the next request.
"""
from sqlalchemy.exc import SQLAlchemyError

from payroll_app.extensions import db
from payroll_app.exceptions import NotFound
from payroll_app.models.hr_models import Employee
from payroll_app.models.payroll_models import SalaryRecord


class SalaryRecordStore:
    """Salary records keyed by (employee_id, month, year) or by id."""

    def get(self, salary_id):
        return db.session.get(SalaryRecord, salary_id)

    def find_by_employee_and_period(self, employee_id, month, year):
        return SalaryRecord.query.filter_by(
            employee_id=employee_id, month=month, year=year
        ).first()

    def exists_by_employee_and_period(self, employee_id, month, year):
        return db.session.query(SalaryRecord.id).filter_by(
            employee_id=employee_id, month=month, year=year
        ).first() is not None

    def history_query(self, employee_id):
        # Most recent period first
        return SalaryRecord.query.filter_by(employee_id=employee_id).order_by(
            SalaryRecord.year.desc(),
            SalaryRecord.month.desc(),
            SalaryRecord.id.asc(),
        )

    def find_all_by_employee(self, employee_id):
        return self.history_query(employee_id).all()

    def page_by_employee(self, employee_id, page=1, per_page=12):
        return self.history_query(employee_id).paginate(
            page=page, per_page=per_page, error_out=False
        )

    def count_by_employee(self, employee_id):
        return SalaryRecord.query.filter_by(employee_id=employee_id).count()

    def find_all_by_period(self, month, year):
        return SalaryRecord.query.filter_by(month=month, year=year).order_by(
            SalaryRecord.employee_id.asc(), SalaryRecord.id.asc()
        ).all()

    def find_all_by_year(self, year):
        return SalaryRecord.query.filter_by(year=year).order_by(
            SalaryRecord.month.desc(),
            SalaryRecord.employee_id.asc(),
            SalaryRecord.id.asc(),
        ).all()

    def find_by_processed_flag(self, processed):
        return SalaryRecord.query.filter_by(processed=processed).order_by(
            SalaryRecord.year.desc(),
            SalaryRecord.month.desc(),
            SalaryRecord.id.asc(),
        ).all()

    def save(self, record):
        db.session.add(record)
        self._commit()
        return record

    def save_all(self, records):
        db.session.add_all(records)
        self._commit()
        return records

    def delete(self, record):
        db.session.delete(record)
        self._commit()

    def _commit(self):
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise


class EmployeeResolver:
    """Read-only employee lookup used to validate salary submissions."""

    def find_employee_by_id(self, employee_id):
        employee = db.session.get(Employee, employee_id)
        if employee is None:
            raise NotFound(f"Employee not found with id: {employee_id}", employee_id=employee_id)
        return employee

