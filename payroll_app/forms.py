from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import StringField, PasswordField, TextAreaField, IntegerField, DecimalField
from wtforms.validators import DataRequired, InputRequired, Email, Length, Optional, NumberRange, StopValidation

from payroll_app.exceptions import ValidationFailure


def form_from_json(form_class, data):
    """Bind a form to a JSON body instead of request.form."""
    if data is not None and not isinstance(data, dict):
        raise ValidationFailure("Request body must be a JSON object")
    formdata = MultiDict({
        key: str(value) for key, value in (data or {}).items() if value is not None
    })
    return form_class(formdata=formdata, meta={'csrf': False})


def validated(form):
    if not form.validate():
        raise ValidationFailure("Invalid input", errors=form.errors)
    return form


# ------------------------
# Authentication Forms
# ------------------------

class LoginForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired()])


# ------------------------
# Salary Forms
# ------------------------

def finite_number(form, field):
    """Stop NaN/Infinity before NumberRange tries to compare them."""
    if field.data is not None and not field.data.is_finite():
        raise StopValidation('Must be a finite number.')


class SalaryForm(FlaskForm):
    basic_salary = DecimalField('Basic Salary', places=2,
                                validators=[InputRequired(), finite_number, NumberRange(min=0)])
    allowances = DecimalField('Allowances', places=2,
                              validators=[Optional(), finite_number, NumberRange(min=0)])
    deductions = DecimalField('Deductions', places=2,
                              validators=[Optional(), finite_number, NumberRange(min=0)])
    tax_percent = DecimalField('Tax %', places=2,
                               validators=[Optional(), finite_number, NumberRange(min=0, max=100)])
    month = IntegerField('Month', validators=[InputRequired(), NumberRange(min=1, max=12)])
    year = IntegerField('Year', validators=[InputRequired(), NumberRange(min=1900, max=2100)])


# ------------------------
# Department Forms
# ------------------------

class DepartmentForm(FlaskForm):
    name = StringField('Department Name', validators=[DataRequired(), Length(max=100)])
    description = TextAreaField('Description', validators=[Optional()])
