"""
Flask application factory for the Ruscles site backend.

Serves the public contact intake and read endpoints used by the marketing
site, and the session-gated admin API behind the back office.
"""

import logging
from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt

db = SQLAlchemy()
bcrypt = Bcrypt()


def create_app(config_name=None):
    """Application factory pattern"""
    from .flask_config import get_config

    app = Flask(__name__)

    if config_name is None or isinstance(config_name, str):
        app.config.from_object(get_config(config_name))
    else:
        app.config.from_object(config_name)

    # Configure logging
    logging.basicConfig(level=getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO))
    app.logger.info(f"Configuration loaded for environment: {app.config['ENVIRONMENT']}")

    # Initialize extensions with app
    db.init_app(app)
    bcrypt.init_app(app)
    CORS(app,
        supports_credentials=True,
        resources={
            r"/api/*": {
                "origins": [app.config['FRONTEND_URL'], "http://localhost:3000"],
                "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"],
                "max_age": app.config['CORS_MAX_AGE'],
                "supports_credentials": True
            }
        }
    )

    # The allow-list is built once from config and injected into the identity service
    from .services.identity_service import AdminAccessPolicy, IdentityService
    from .services.google_auth_service import GoogleAuthService

    policy = AdminAccessPolicy.from_config(app.config)
    google = GoogleAuthService(
        client_id=app.config.get('GOOGLE_CLIENT_ID'),
        tokeninfo_url=app.config['GOOGLE_TOKENINFO_URL'],
        timeout=app.config['GOOGLE_TIMEOUT'],
    )
    app.extensions['identity_service'] = IdentityService(policy, google_auth=google)

    # Register blueprints
    from .routes import (
        auth_bp, testimonials_bp, portfolio_bp, blog_bp, pages_bp, customers_bp,
        projects_bp, forms_bp, settings_bp, business_info_bp, dashboard_bp,
        system_bp, contact_bp, public_bp, admin_pages_bp
    )

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(testimonials_bp, url_prefix='/api/content/testimonials')
    app.register_blueprint(portfolio_bp, url_prefix='/api/content/portfolio')
    app.register_blueprint(blog_bp, url_prefix='/api/content/blog')
    app.register_blueprint(pages_bp, url_prefix='/api/content/pages')
    app.register_blueprint(customers_bp, url_prefix='/api/customers')
    app.register_blueprint(projects_bp, url_prefix='/api/projects')
    app.register_blueprint(forms_bp, url_prefix='/api/forms')
    app.register_blueprint(settings_bp, url_prefix='/api/settings')
    app.register_blueprint(business_info_bp, url_prefix='/api/business-info')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')
    app.register_blueprint(system_bp, url_prefix='/api')
    app.register_blueprint(public_bp, url_prefix='/api/public')
    app.register_blueprint(contact_bp, url_prefix='/contact')
    app.register_blueprint(admin_pages_bp)

    from .middleware.auth import register_admin_guard
    register_admin_guard(app)

    _register_error_handlers(app)
    _register_cli(app)

    return app


def _register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Unhandled server error: {error}")
        return jsonify({'error': 'Internal server error'}), 500


def _register_cli(app):
    import click
    from .services.database_service import DatabaseService

    @app.cli.command('init-db')
    def init_db():
        """Create all database tables."""
        db.create_all()
        click.echo('Database tables created')

    @app.cli.command('seed-db')
    def seed_db():
        """Insert the admin user, business info and default settings."""
        db.create_all()
        summary = DatabaseService(db.session).seed(
            admin_email=app.config['SEED_ADMIN_EMAIL'],
            company_name=app.config['SEED_COMPANY_NAME'],
        )
        click.echo(f"Seed complete: {summary}")

    @app.cli.command('create-admin')
    @click.argument('email')
    @click.option('--name', default=None, help='Display name')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(email, name, password):
        """Create or promote an admin user with a password."""
        from .exceptions import ServiceError
        from .services.customer_service import CustomerService

        db.create_all()
        try:
            user = CustomerService(db.session).create_admin(email, password, name=name)
        except ServiceError as e:
            raise click.ClickException(e.message)
        click.echo(f"Admin ready: {user.email} (id {user.id})")
