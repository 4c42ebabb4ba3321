# payroll_app/__init__.py
import logging
import os

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from payroll_app.extensions import db, login_manager, migrate
from payroll_app.exceptions import PayrollError

# Import all models so Flask-Migrate can detect them
from payroll_app.models.user import User
import payroll_app.models.hr_models
import payroll_app.models.payroll_models

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    package_logger = logging.getLogger('payroll_app')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s [%(name)s] %(message)s'
        ))
        package_logger.addHandler(handler)


def register_error_handlers(app):
    @app.errorhandler(PayrollError)
    def handle_payroll_error(error):
        logger.warning("%s: %s %s", type(error).__name__, error.message, error.context or "")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception("Database error")
        return jsonify({'success': False, 'error': 'Database error'}), 500

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'success': False, 'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({'success': False, 'error': 'Method not allowed'}), 405


def create_app(config=None):
    app = Flask(__name__)

    # Load global config, then per-deployment/test overrides
    from payroll_app.config import Config
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    configure_logging(app)

    # default SQLite file lives in payroll_app/instance
    os.makedirs(os.path.join(os.path.dirname(__file__), "instance"), exist_ok=True)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # -----------------------------
    # User loader (shared User model)
    # -----------------------------
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'error': 'Authentication required'}), 401

    register_error_handlers(app)

    # -----------------------------
    # Register Payroll Blueprints
    # -----------------------------
    from payroll_app.blueprints.payroll_system.routes.auth_routes import payroll_auth_bp
    from payroll_app.blueprints.payroll_system.routes.api_routes import payroll_api_bp
    from payroll_app.blueprints.payroll_system.routes.employee_routes import payroll_employee_bp
    from payroll_app.blueprints.payroll_system.routes.department_routes import department_bp

    app.register_blueprint(payroll_auth_bp, url_prefix='/payroll/auth')
    app.register_blueprint(payroll_api_bp, url_prefix='/salary')
    app.register_blueprint(payroll_employee_bp, url_prefix='/salary')
    app.register_blueprint(department_bp, url_prefix='/departments')

    from payroll_app.commands import payroll_cli
    app.cli.add_command(payroll_cli)

    @app.route("/health")
    def health():
        return jsonify({'success': True, 'status': 'ok'})

    return app
