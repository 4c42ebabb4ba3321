from collections import namedtuple
from decimal import Decimal
from functools import wraps

from flask import jsonify
from flask_login import current_user

from payroll_app.deductions import quantize_money, to_decimal

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"

# Resolved identity of whoever is asking; built from the session by the HTTP layer.
Actor = namedtuple("Actor", ["user_id", "role", "employee_id"])


# ------------------------
# Visibility
# ------------------------

def can_view(actor, target_employee_id):
    """Admins see every salary; employees only their own."""
    if actor is None:
        return False
    role = (actor.role or "").lower()
    if role == ROLE_ADMIN:
        return True
    if role == ROLE_EMPLOYEE:
        return actor.employee_id is not None and actor.employee_id == target_employee_id
    return False


def actor_from_user(user):
    if user is None or not user.is_authenticated:
        return None
    profile = getattr(user, "employee_profile", None)
    return Actor(
        user_id=user.id,
        role=user.role,
        employee_id=profile.id if profile is not None else None,
    )


# ------------------------
# Role-based decorators
# ------------------------

def admin_required(f):
    """Decorator to require admin role"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        if not current_user.is_admin():
            return jsonify({'success': False, 'error': 'Admin access required'}), 403
        return f(*args, **kwargs)
    return decorated_function


def employee_required(f):
    """Decorator to require a logged-in user linked to an employee profile"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        if not current_user.is_employee() or current_user.employee_profile is None:
            return jsonify({'success': False, 'error': 'Employee access required'}), 403
        return f(*args, **kwargs)
    return decorated_function


def can_view_required(f):
    """Decorator for routes taking ``employee_id``: admin, or the employee themself."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        if not can_view(actor_from_user(current_user), kwargs.get("employee_id")):
            return jsonify({'success': False, 'error': 'Not authorized to view this salary'}), 403
        return f(*args, **kwargs)
    return decorated_function


# ------------------------
# Formatting
# ------------------------

def month_name(month):
    return MONTH_NAMES[int(month) - 1]


def format_amount(amount):
    """Two decimals, no grouping: 50000 -> '50000.00'"""
    return f"{quantize_money(amount):f}"


def format_currency(amount, symbol):
    return f"{symbol} {format_amount(amount)}"


def format_percent(percent):
    """Stored 20.00 prints as 20, 12.50 as 12.5"""
    value = to_decimal(percent)
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return f"{value.normalize():f}"
