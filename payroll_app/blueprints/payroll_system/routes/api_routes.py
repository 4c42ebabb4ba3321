import io

from flask import Blueprint, jsonify, request, send_file
from flask_login import login_required

from payroll_app.forms import SalaryForm, form_from_json, validated
from payroll_app.payslip import payslip_filename, render_payslip
from payroll_app.reports import format_summary_for_insights, payroll_summary
from payroll_app.salary_service import PayrollService
from payroll_app.utils import admin_required, can_view_required, format_amount

payroll_api_bp = Blueprint('payroll_api', __name__)
salary_service = PayrollService()


def serialize_salary(record):
    employee = record.employee
    return {
        'salary_id': record.id,
        'employee_id': record.employee_id,
        'employee_code': employee.employee_code if employee else None,
        'employee_name': employee.get_full_name() if employee else None,
        'month': record.month,
        'year': record.year,
        'basic_salary': format_amount(record.basic_salary),
        'allowances': format_amount(record.allowances),
        'deductions': format_amount(record.deductions),
        'tax_percent': format_amount(record.tax_percent),
        'gross_salary': format_amount(record.gross_salary),
        'tax_amount': format_amount(record.tax_amount),
        'net_salary': format_amount(record.net_salary),
        'processed': record.processed,
        'created_at': record.created_at.isoformat() if record.created_at else None,
        'updated_at': record.updated_at.isoformat() if record.updated_at else None,
    }


def salary_list_response(records):
    return jsonify({
        'success': True,
        'data': [serialize_salary(r) for r in records],
        'count': len(records)
    })


def pdf_response(pdf_bytes, filename):
    return send_file(
        io.BytesIO(pdf_bytes),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=filename
    )


# =========================================================
# CREATE / UPDATE
# =========================================================
@payroll_api_bp.route('/<int:employee_id>', methods=['POST'])
@login_required
@admin_required
def create_or_update_salary(employee_id):
    form = validated(form_from_json(SalaryForm, request.get_json(silent=True)))

    record = salary_service.create_or_update(
        employee_id,
        form.month.data,
        form.year.data,
        form.basic_salary.data,
        allowances=form.allowances.data,
        deductions=form.deductions.data,
        tax_percent=form.tax_percent.data,
    )
    return jsonify({'success': True, 'data': serialize_salary(record)}), 201


# =========================================================
# EMPLOYEE HISTORY / LOOKUP
# =========================================================
@payroll_api_bp.route('/<int:employee_id>')
@can_view_required
def get_salary_history(employee_id):
    return salary_list_response(salary_service.get_history(employee_id))


@payroll_api_bp.route('/<int:employee_id>/paged')
@can_view_required
def get_salary_history_paged(employee_id):
    page = request.args.get('page', 1, type=int)
    per_page = min(request.args.get('per_page', 12, type=int), 100)

    pagination = salary_service.get_history_page(employee_id, page=page, per_page=per_page)
    return jsonify({
        'success': True,
        'data': [serialize_salary(r) for r in pagination.items],
        'total': pagination.total,
        'page': pagination.page,
        'pages': pagination.pages,
        'per_page': pagination.per_page
    })


@payroll_api_bp.route('/<int:employee_id>/<int:month>/<int:year>')
@can_view_required
def get_salary_by_period(employee_id, month, year):
    record = salary_service.get_by_period(employee_id, month, year)
    return jsonify({'success': True, 'data': serialize_salary(record)})


# =========================================================
# ORGANIZATION-WIDE QUERIES
# =========================================================
@payroll_api_bp.route('/month/<int:month>/year/<int:year>')
@login_required
@admin_required
def get_salaries_by_period(month, year):
    return salary_list_response(salary_service.get_all_by_period(month, year))


@payroll_api_bp.route('/year/<int:year>')
@login_required
@admin_required
def get_salaries_by_year(year):
    return salary_list_response(salary_service.get_all_by_year(year))


@payroll_api_bp.route('/unprocessed')
@login_required
@admin_required
def get_unprocessed_salaries():
    return salary_list_response(salary_service.unprocessed_records())


@payroll_api_bp.route('/summary/month/<int:month>/year/<int:year>')
@login_required
@admin_required
def get_payroll_summary(month, year):
    summary = payroll_summary(month, year, service=salary_service)
    data = {
        key: format_amount(value) if key.startswith('total_') and key != 'total_employees' else value
        for key, value in summary.items()
        if key != 'departments'
    }
    data['departments'] = [
        {
            'department': d['department'],
            'employees': d['employees'],
            'gross_salary': format_amount(d['gross_salary']),
            'tax_amount': format_amount(d['tax_amount']),
            'deductions': format_amount(d['deductions']),
            'net_salary': format_amount(d['net_salary']),
        }
        for d in summary['departments']
    ]
    data['insight_text'] = format_summary_for_insights(summary)
    return jsonify({'success': True, 'data': data})


# =========================================================
# DELETE / PROCESS
# =========================================================
@payroll_api_bp.route('/record/<int:salary_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_salary(salary_id):
    salary_service.delete(salary_id)
    return jsonify({'success': True, 'message': 'Salary record deleted successfully'})


@payroll_api_bp.route('/process/<int:salary_id>', methods=['PUT'])
@login_required
@admin_required
def mark_salary_processed(salary_id):
    record = salary_service.mark_processed(salary_id)
    return jsonify({'success': True, 'data': serialize_salary(record)})


@payroll_api_bp.route('/process/month/<int:month>/year/<int:year>', methods=['PUT'])
@login_required
@admin_required
def process_period(month, year):
    count = salary_service.process_period(month, year)
    return jsonify({
        'success': True,
        'message': f'{count} salary records marked as processed',
        'processed_count': count
    })


# =========================================================
# PAYSLIPS
# =========================================================
@payroll_api_bp.route('/<int:employee_id>/payslip/<int:month>/<int:year>')
@can_view_required
def download_payslip(employee_id, month, year):
    record = salary_service.get_by_period(employee_id, month, year)
    pdf = render_payslip(record, record.employee)
    return pdf_response(pdf, payslip_filename(employee_id, record.month, record.year))


@payroll_api_bp.route('/payslip/<int:salary_id>')
@login_required
@admin_required
def download_payslip_by_salary_id(salary_id):
    record = salary_service.get_salary(salary_id)
    employee = record.employee
    pdf = render_payslip(record, employee)
    return pdf_response(pdf, payslip_filename(employee.employee_code, record.month, record.year))
