import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'payroll-engine-dev-key'

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(
        os.path.abspath(os.path.join(os.path.dirname(__file__), 'instance')),
        'payroll.db'
    )

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_HTTPONLY = True

    # JSON API: forms are fed from request bodies, not browser posts
    WTF_CSRF_ENABLED = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Payslip header / money formatting
    PAYSLIP_COMPANY_NAME = os.environ.get('PAYSLIP_COMPANY_NAME', 'Employee Payroll System')
    PAYSLIP_COMPANY_ADDRESS = os.environ.get(
        'PAYSLIP_COMPANY_ADDRESS', '123 Business Street, City, State - 12345'
    )
    PAYSLIP_CURRENCY_SYMBOL = os.environ.get('PAYSLIP_CURRENCY_SYMBOL', 'Rs.')
