import click
from flask.cli import AppGroup

from payroll_app.salary_service import PayrollService
from payroll_app.utils import format_amount

payroll_cli = AppGroup("payroll", help="Payroll batch operations.")


@payroll_cli.command("process-period")
@click.argument("month", type=int)
@click.argument("year", type=int)
def process_period_command(month, year):
    """Mark every unprocessed salary record of MONTH/YEAR as processed."""
    count = PayrollService().process_period(month, year)
    click.echo(f"{count} salary records marked as processed for {month}/{year}")


@payroll_cli.command("unprocessed")
def unprocessed_command():
    """List salary records still awaiting processing."""
    records = PayrollService().unprocessed_records()
    if not records:
        click.echo("No unprocessed salary records.")
        return
    for record in records:
        click.echo(
            f"#{record.id}  employee {record.employee_id}  "
            f"{record.month:02d}/{record.year}  net {format_amount(record.net_salary)}"
        )
