from datetime import datetime

from flask import Blueprint, jsonify, request
from flask_login import login_user, logout_user, login_required, current_user
from werkzeug.security import check_password_hash

from payroll_app.extensions import db
from payroll_app.forms import LoginForm, form_from_json, validated
from payroll_app.models.user import User

payroll_auth_bp = Blueprint("payroll_auth", __name__)


def serialize_user(user):
    profile = user.employee_profile
    return {
        'id': user.id,
        'email': user.email,
        'name': user.get_full_name(),
        'role': user.role,
        'employee_id': profile.id if profile else None,
    }


# =========================================================
# LOGIN
# =========================================================
@payroll_auth_bp.route("/login", methods=["POST"])
def login():
    form = validated(form_from_json(LoginForm, request.get_json(silent=True)))

    user = User.query.filter_by(email=form.email.data.strip()).first()
    if not user or not check_password_hash(user.password, form.password.data):
        return jsonify({'success': False, 'error': 'Invalid email or password.'}), 401

    if not user.active:
        return jsonify({'success': False, 'error': 'Your account has been deactivated.'}), 403

    login_user(user)
    user.last_login = datetime.utcnow()
    db.session.commit()

    return jsonify({'success': True, 'data': serialize_user(user)})


# =========================================================
# LOGOUT
# =========================================================
@payroll_auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True, 'message': 'You have been logged out successfully.'})


@payroll_auth_bp.route("/me")
@login_required
def me():
    return jsonify({'success': True, 'data': serialize_user(current_user)})
