import os
import logging
import click
from logging.handlers import RotatingFileHandler
from flask import Flask
from flask.logging import default_handler
from flask_wtf.csrf import CSRFError
from config import config
from extensions import db, migrate, csrf, limiter
from utils.errors import NotFoundError


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        log_dir = app.config.get('LOG_DIR', 'logs')
        if not os.path.exists(log_dir):
            os.mkdir(log_dir)

        # File handler for errors
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'retirement_planner.log'),
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        # Service modules log through their own module loggers
        logging.getLogger('services').addHandler(file_handler)
        logging.getLogger('services').setLevel(logging.INFO)
        logging.getLogger('utils').addHandler(file_handler)
        logging.getLogger('utils').setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Retirement Planner startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        for name in ('services', 'utils'):
            module_logger = logging.getLogger(name)
            module_logger.setLevel(logging.DEBUG)
            if default_handler not in module_logger.handlers:
                module_logger.addHandler(default_handler)
        app.logger.info('Retirement Planner startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    if (app.config.get('SQLALCHEMY_DATABASE_URI') or '').startswith('sqlite:///') and not app.testing:
        os.makedirs(app.instance_path, exist_ok=True)

    # Configure logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    limiter.init_app(app)

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models

    # Register blueprints
    from blueprints.dashboard import dashboard_bp
    from blueprints.investments import investments_bp
    from blueprints.income import income_bp
    from blueprints.housing import housing_bp
    from blueprints.expenses import expenses_bp
    from blueprints.settings import settings_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(investments_bp)
    app.register_blueprint(income_bp)
    app.register_blueprint(housing_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(settings_bp)

    register_template_filters(app)

    # Create database tables
    with app.app_context():
        db.create_all()

    # Register Flask-Admin (must come after db.init_app and all models are loaded)
    if app.config.get('ADMIN_ENABLED'):
        from admin_panel import init_admin
        init_admin(app, db)
        # Flask-Admin generates its own form tokens; exempt its blueprint from
        # Flask-WTF's global CSRF so the two don't conflict.
        csrf.exempt(app.blueprints['admin'])

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def register_template_filters(app):
    """Jinja2 filters for money and percentages"""

    @app.template_filter('currency')
    def currency_filter(value):
        """Whole dollars, e.g. $12,345"""
        if value is None:
            return 'n/a'
        amount = float(value)
        sign = '-' if amount < 0 else ''
        return f'{sign}${abs(amount):,.0f}'

    @app.template_filter('cents')
    def cents_filter(value):
        if value is None:
            return 'n/a'
        return f'${float(value):,.2f}'

    @app.template_filter('pct')
    def pct_filter(value, signed=False):
        if value is None:
            return 'n/a'
        return f'{float(value):+.1f}%' if signed else f'{float(value):.1f}%'

    @app.context_processor
    def utility_processor():
        from models.accounts import AccountType
        from models.income import IncomeFrequency
        return dict(
            account_type_labels=AccountType.LABELS,
            frequency_labels=IncomeFrequency.LABELS,
        )


def register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(404)
    def not_found_error(error):
        from flask import render_template
        return render_template('errors/404.html'), 404

    @app.errorhandler(NotFoundError)
    def record_not_found(error):
        from flask import render_template
        app.logger.info(f'Not found: {error}')
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        from flask import render_template
        db.session.rollback()
        app.logger.error(f'Internal Server Error: {error}')
        return render_template('errors/500.html'), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        from flask import render_template, flash
        flash('CSRF token validation failed. Please try again.', 'danger')
        return render_template('errors/csrf.html', reason=error.description), 400


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('seed-demo')
    @click.option('--reset', is_flag=True, help='Drop and recreate every table first.')
    def seed_demo(reset):
        """Populate a sample household."""
        from demo_data import populate_demo_data
        if reset:
            db.drop_all()
            db.create_all()
        counts = populate_demo_data()
        for name, count in counts.items():
            click.echo(f'{name:<20} {count}')

    @app.cli.group('glide-path')
    def glide_path():
        """Glide path tools."""
        pass

    @glide_path.command('recommend')
    @click.option('--birth-year', type=int, required=True)
    @click.option('--retirement-age', type=int, default=65, show_default=True)
    def recommend(birth_year, retirement_age):
        """Print the recommended glide path for BIRTH_YEAR."""
        from services.glide_path_service import GlidePathService
        from utils.errors import ValidationError
        try:
            waypoints = GlidePathService.generate_recommended_glide_path(birth_year, retirement_age)
        except ValidationError as e:
            raise click.ClickException(str(e))

        click.echo(f'{"Year":<6} {"Equity":>8} {"Fixed":>8} {"Cash":>8}')
        click.echo('-' * 33)
        for w in waypoints:
            click.echo(f'{w["year"]:<6} {w["equity_pct"]:>7.1f}% {w["fixed_income_pct"]:>7.1f}% {w["cash_pct"]:>7.1f}%')

    @app.cli.group('pension')
    def pension():
        """Government pension estimates."""
        pass

    @pension.command('project')
    def project():
        """Print CPP / OAS estimates for every person."""
        from services.pension_service import PensionService
        projections = PensionService.get_pension_projections()
        if not projections:
            click.echo('No people found. Add them in Settings or run "flask seed-demo".')
            return
        click.echo(f'{"Name":<20} {"Age":>4} {"Claim":>6} {"CPP/mo":>10} {"OAS/mo":>10}')
        click.echo('-' * 54)
        for p in projections:
            if not p['has_birth_year']:
                click.echo(f'{p["person"].name:<20} (no birth year)')
                continue
            click.echo(f'{p["person"].name:<20} {p["age"]:>4} {p["claim_age"]:>6} '
                       f'{p["cpp"]["monthly"]:>10,.2f} {p["oas"]["monthly"]:>10,.2f}')


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost in development
    # Never use 0.0.0.0 with debug mode - it exposes the debugger to the network
    app.run(host='127.0.0.1', port=5000, debug=True)
