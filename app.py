import logging
import os

import click
from flask import Flask, render_template, redirect, url_for, flash
from flask_login import current_user
from flask_wtf.csrf import CSRFError

from config import ProductionConfig, DevelopmentConfig, TestingConfig

# Import extensions to avoid circular imports
from extensions import db, login_manager, csrf, migrate

from models import User


def configure_logging(app):
    """Set the root and application log level from ``LOG_LEVEL``."""
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)


def register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create all database tables."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('seed-demo')
    @click.option('--admin-password', default='admin', show_default=True,
                  help='Password for the demo administrator account.')
    def seed_demo_command(admin_password):
        """Load the demo administrator, teachers, classes and subjects."""
        from sample_data import seed_demo_data
        db.create_all()
        summary = seed_demo_data(admin_password=admin_password)
        click.echo(
            f"Seeded {summary['teachers']} teachers, {summary['classes']} classes "
            f"and {summary['subjects']} subjects."
        )


def register_error_handlers(app):
    @app.errorhandler(401)
    def unauthorized_error(error):
        """Handle 401 Unauthorized errors by redirecting to login page."""
        flash('Za dostop do te strani se prijavite.', 'warning')
        return redirect(url_for('auth.login'))

    @app.errorhandler(403)
    def forbidden_error(error):
        return render_template('shared/error.html',
                               error_code=403,
                               error_message='Za dostop do te strani nimate dovoljenja.'), 403

    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('shared/error.html',
                               error_code=404,
                               error_message='Iskana stran ne obstaja.'), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server errors."""
        db.session.rollback()
        app.logger.error(f"500 Error: {error}")
        return render_template('shared/error.html',
                               error_code=500,
                               error_message='Prišlo je do napake na strežniku. Poskusite znova kasneje.'), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        app.logger.warning(f"CSRF error: {error.description}")
        flash('Neveljavna oddaja obrazca. Poskusite znova.', 'danger')
        return redirect(url_for('auth.login'))


def create_app(config_class=None):
    """
    Factory function to create the Flask application.
    Automatically selects configuration based on environment.
    """
    if config_class is None:
        env = os.environ.get('FLASK_ENV', 'production').lower()
        if env == 'development':
            config_class = DevelopmentConfig
        elif env == 'testing':
            config_class = TestingConfig
        else:
            config_class = ProductionConfig  # Default to production for security

    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') \
            and ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
        os.makedirs(os.path.join(app.root_path, 'instance'), exist_ok=True)

    # Initialize extensions with the app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    from authroutes import auth_blueprint
    from admin_routes import admin_blueprint

    app.register_blueprint(auth_blueprint)
    app.register_blueprint(admin_blueprint, url_prefix='/admin')

    @app.after_request
    def add_security_headers(response):
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self'; "
            "img-src 'self' data:;"
        )
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response

    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def home():
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login'))
        if current_user.is_admin:
            return redirect(url_for('admin.classes.manage_classes'))
        return render_template('shared/home.html')

    app.logger.info(f"Application created with {config_class.__name__}")
    return app
