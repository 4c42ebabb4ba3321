from datetime import datetime
from payroll_app.extensions import db
from payroll_app.deductions import compute_salary

# ================= SALARY RECORD ==================
class SalaryRecord(db.Model):
    """One employee's salary for one (month, year) payroll period."""
    __tablename__ = "salary_details"
    __table_args__ = (
        db.UniqueConstraint("employee_id", "month", "year", name="uq_salary_employee_period"),
        db.CheckConstraint("month BETWEEN 1 AND 12", name="ck_salary_month_range"),
    )

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=False, index=True)

    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False, index=True)

    # ---- inputs ----
    basic_salary = db.Column(db.Numeric(10, 2), nullable=False)
    allowances = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    deductions = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    tax_percent = db.Column(db.Numeric(5, 2), nullable=False, default=0)

    # ---- derived, written only by recompute() ----
    gross_salary = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    tax_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    net_salary = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    processed = db.Column(db.Boolean, nullable=False, default=False, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    employee = db.relationship("Employee", back_populates="salary_records")

    def __repr__(self):
        return f"<SalaryRecord employee={self.employee_id} {self.month}/{self.year}>"

    @property
    def period(self):
        return (self.month, self.year)

    def apply_inputs(self, basic_salary, allowances, deductions, tax_percent):
        """Overwrite the four inputs and refresh the derived columns together."""
        self.basic_salary = basic_salary
        self.allowances = allowances
        self.deductions = deductions
        self.tax_percent = tax_percent
        self.recompute()

    def recompute(self):
        breakdown = compute_salary(
            self.basic_salary,
            self.allowances,
            self.deductions,
            self.tax_percent,
        )
        self.gross_salary = breakdown.gross
        self.tax_amount = breakdown.tax_amount
        self.net_salary = breakdown.net
        return breakdown
