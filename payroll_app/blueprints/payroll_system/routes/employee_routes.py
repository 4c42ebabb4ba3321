from flask import Blueprint, jsonify
from flask_login import current_user

from payroll_app.blueprints.payroll_system.routes.api_routes import (
    pdf_response, salary_list_response, salary_service, serialize_salary
)
from payroll_app.payslip import payslip_filename, render_payslip
from payroll_app.utils import employee_required

payroll_employee_bp = Blueprint('payroll_employee', __name__)


# =========================================================
# SELF-SERVICE (logged-in employee)
# =========================================================
@payroll_employee_bp.route('/my-salary')
@employee_required
def my_salary_history():
    employee = current_user.employee_profile
    return salary_list_response(salary_service.get_history(employee.id))


@payroll_employee_bp.route('/my-salary/<int:month>/<int:year>')
@employee_required
def my_salary_by_period(month, year):
    employee = current_user.employee_profile
    record = salary_service.get_by_period(employee.id, month, year)
    return jsonify({'success': True, 'data': serialize_salary(record)})


@payroll_employee_bp.route('/my-payslip/<int:month>/<int:year>')
@employee_required
def my_payslip(month, year):
    employee = current_user.employee_profile
    record = salary_service.get_by_period(employee.id, month, year)
    pdf = render_payslip(record, employee)
    return pdf_response(pdf, payslip_filename(employee.employee_code, record.month, record.year))
