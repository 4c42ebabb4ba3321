"""initial payroll schema: users, departments, employees, salary records

Revision ID: 3c1d9a7e5b20
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1d9a7e5b20'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=150), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table(
        'department',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table(
        'employee',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_code', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('department_id', sa.Integer(), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('middle_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=150), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('date_hired', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['department_id'], ['department.id'], name='fk_employee_department_id'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], name='fk_employee_user_id'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('employee_code'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table(
        'salary_details',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('basic_salary', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('allowances', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('deductions', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('tax_percent', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('gross_salary', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('tax_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('net_salary', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('processed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('month BETWEEN 1 AND 12', name='ck_salary_month_range'),
        sa.ForeignKeyConstraint(['employee_id'], ['employee.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('employee_id', 'month', 'year', name='uq_salary_employee_period')
    )
    with op.batch_alter_table('salary_details', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_salary_details_employee_id'), ['employee_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_salary_details_processed'), ['processed'], unique=False)
        batch_op.create_index(batch_op.f('ix_salary_details_year'), ['year'], unique=False)


def downgrade():
    with op.batch_alter_table('salary_details', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_salary_details_year'))
        batch_op.drop_index(batch_op.f('ix_salary_details_processed'))
        batch_op.drop_index(batch_op.f('ix_salary_details_employee_id'))

    op.drop_table('salary_details')
    op.drop_table('employee')
    op.drop_table('department')
    op.drop_table('user')
