from datetime import date

import pytest
from werkzeug.security import generate_password_hash

from payroll_app import create_app
from payroll_app.extensions import db
from payroll_app.models.hr_models import Department, Employee
from payroll_app.models.user import User

PASSWORD = 'secret123'


@pytest.fixture(scope='function')
def app():
    """Isolated in-memory database for each test."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SECRET_KEY': 'test-secret-key',
        'WTF_CSRF_ENABLED': False,
        'LOG_LEVEL': 'WARNING',
    })
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Application context for tests that call services directly."""
    with app.app_context():
        yield app


def make_department(name='Engineering', description=None):
    department = Department(name=name, description=description)
    db.session.add(department)
    db.session.commit()
    return department


def make_employee(code, email, department=None, **kwargs):
    employee = Employee(
        employee_code=code,
        first_name=kwargs.pop('first_name', 'Asha'),
        last_name=kwargs.pop('last_name', 'Verma'),
        email=email,
        department=department,
        date_hired=kwargs.pop('date_hired', date(2021, 4, 1)),
        **kwargs
    )
    db.session.add(employee)
    db.session.commit()
    return employee


def make_user(email, role, password=PASSWORD, employee=None):
    user = User(
        email=email,
        password=generate_password_hash(password),
        first_name='Test',
        last_name=role.title(),
        role=role,
    )
    db.session.add(user)
    db.session.commit()
    if employee is not None:
        employee.user_id = user.id
        db.session.commit()
    return user


# ----------------------------------------
# Service-level fixtures (inside ctx)
# ----------------------------------------

@pytest.fixture
def department(ctx):
    return make_department('Engineering', 'Product engineering')


@pytest.fixture
def employee(ctx, department):
    return make_employee('EMP001', 'asha.verma@company.com', department)


@pytest.fixture
def other_employee(ctx):
    return make_employee('EMP002', 'ravi.nair@company.com', first_name='Ravi', last_name='Nair')


# ----------------------------------------
# HTTP fixtures (no context held open between requests)
# ----------------------------------------

@pytest.fixture
def people(app):
    """Seed one admin, one employee with a login and one without; return their ids."""
    with app.app_context():
        dept = make_department('Engineering')
        asha = make_employee('EMP001', 'asha.verma@company.com', dept)
        ravi = make_employee('EMP002', 'ravi.nair@company.com', first_name='Ravi', last_name='Nair')
        make_user('admin@company.com', 'admin')
        make_user('asha@company.com', 'employee', employee=asha)
        return {
            'department_id': dept.id,
            'employee_id': asha.id,
            'employee_code': asha.employee_code,
            'other_employee_id': ravi.id,
        }


def login(client, email, password=PASSWORD):
    response = client.post('/payroll/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app, people):
    return login(app.test_client(), 'admin@company.com')


@pytest.fixture
def employee_client(app, people):
    return login(app.test_client(), 'asha@company.com')
