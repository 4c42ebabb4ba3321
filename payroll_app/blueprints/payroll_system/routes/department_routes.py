from flask import Blueprint, jsonify, request
from flask_login import login_required

from payroll_app import department_service
from payroll_app.forms import DepartmentForm, form_from_json, validated
from payroll_app.utils import admin_required

department_bp = Blueprint('departments', __name__)


def serialize_department(department):
    return {
        'id': department.id,
        'name': department.name,
        'description': department.description,
        'employee_count': len(department.employees),
        'created_at': department.created_at.isoformat() if department.created_at else None,
    }


@department_bp.route('', methods=['GET'])
@login_required
@admin_required
def list_departments():
    departments = department_service.list_departments()
    return jsonify({
        'success': True,
        'data': [serialize_department(d) for d in departments],
        'count': len(departments)
    })


@department_bp.route('', methods=['POST'])
@login_required
@admin_required
def create_department():
    form = validated(form_from_json(DepartmentForm, request.get_json(silent=True)))
    department = department_service.create_department(form.name.data, form.description.data)
    return jsonify({'success': True, 'data': serialize_department(department)}), 201


@department_bp.route('/<int:department_id>', methods=['GET'])
@login_required
@admin_required
def get_department(department_id):
    department = department_service.get_department(department_id)
    return jsonify({'success': True, 'data': serialize_department(department)})


@department_bp.route('/<int:department_id>', methods=['PUT'])
@login_required
@admin_required
def update_department(department_id):
    form = validated(form_from_json(DepartmentForm, request.get_json(silent=True)))
    department = department_service.update_department(
        department_id, form.name.data, form.description.data
    )
    return jsonify({'success': True, 'data': serialize_department(department)})


@department_bp.route('/<int:department_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_department(department_id):
    department_service.delete_department(department_id)
    return jsonify({'success': True, 'message': 'Department deleted successfully'})
