import pytest

from conftest import make_employee

from payroll_app import department_service
from payroll_app.exceptions import InvalidState, NotFound, ValidationFailure


def test_create_and_list(ctx):
    department_service.create_department("Finance", "Books and audits")
    department_service.create_department("  Engineering ")

    names = [d.name for d in department_service.list_departments()]
    assert names == ["Engineering", "Finance"]


def test_duplicate_name_is_refused(ctx):
    department_service.create_department("Finance")

    with pytest.raises(InvalidState) as excinfo:
        department_service.create_department("Finance")

    assert excinfo.value.message == "Department name already exists: Finance"


def test_blank_name_is_invalid(ctx):
    with pytest.raises(ValidationFailure):
        department_service.create_department("   ")


def test_rename_to_taken_name_is_refused(ctx):
    department_service.create_department("Finance")
    sales = department_service.create_department("Sales")

    with pytest.raises(InvalidState):
        department_service.update_department(sales.id, "Finance")

    renamed = department_service.update_department(sales.id, "Sales", "Field sales")
    assert renamed.description == "Field sales"


def test_delete_empty_department(ctx):
    dept = department_service.create_department("Legal")

    department_service.delete_department(dept.id)

    with pytest.raises(NotFound):
        department_service.get_department(dept.id)


def test_department_with_employees_cannot_be_deleted(ctx, department):
    make_employee("EMP020", "kiran.rao@company.com", department)

    with pytest.raises(InvalidState) as excinfo:
        department_service.delete_department(department.id)

    assert excinfo.value.message == "Cannot delete department with existing employees"


def test_unknown_department(ctx):
    with pytest.raises(NotFound):
        department_service.update_department(77, "Anything")
