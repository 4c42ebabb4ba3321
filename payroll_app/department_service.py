# payroll_app/department_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from payroll_app.exceptions import InvalidState, NotFound, ValidationFailure
from payroll_app.extensions import db
from payroll_app.models.hr_models import Department

logger = logging.getLogger(__name__)


def _clean_name(name):
    name = (name or "").strip()
    if not name:
        raise ValidationFailure("Department name is required", errors={"name": "required"})
    if len(name) > 100:
        raise ValidationFailure("Department name is too long", errors={"name": "max 100 characters"})
    return name


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise


def list_departments():
    return Department.query.order_by(Department.name.asc()).all()


def get_department(department_id):
    department = db.session.get(Department, department_id)
    if department is None:
        raise NotFound(f"Department not found with id: {department_id}", department_id=department_id)
    return department


def create_department(name, description=None):
    name = _clean_name(name)
    if Department.query.filter_by(name=name).first():
        raise InvalidState(f"Department name already exists: {name}", name=name)

    department = Department(name=name, description=description)
    db.session.add(department)
    _commit()
    logger.info("Created department %s (%s)", department.id, name)
    return department


def update_department(department_id, name, description=None):
    department = get_department(department_id)
    name = _clean_name(name)
    if name != department.name and Department.query.filter_by(name=name).first():
        raise InvalidState(f"Department name already exists: {name}", name=name)

    department.name = name
    department.description = description
    _commit()
    return department


def delete_department(department_id):
    department = get_department(department_id)
    if department.employees:
        raise InvalidState(
            "Cannot delete department with existing employees",
            department_id=department_id,
        )
    db.session.delete(department)
    _commit()
    logger.info("Deleted department %s", department_id)
