"""
Portfolio Site - Main Application Entry Point
Application Factory Pattern: configuration, extensions, blueprints,
error handlers and template globals are wired here. All route handling
is delegated to blueprints.
"""

import os
from datetime import datetime
from flask import Flask, render_template, request, redirect, flash
from config import get_config
from extensions import db, login_manager

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.admin import admin_bp


NAV_ITEMS = (
    ('Home', 'pages.index'),
    ('About', 'pages.about'),
    ('Projects', 'pages.projects'),
    ('Contact', 'pages.contact'),
)


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio site is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            from sqlalchemy.exc import SQLAlchemyError
            import models  # noqa: F401
            from utils.security import ensure_admin_account
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
            ensure_admin_account()
        except SQLAlchemyError as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


@login_manager.user_loader
def load_user(user_id):
    from models import User
    return db.session.get(User, user_id)


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(admin_bp)


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(403)
    def forbidden(e):
        return render_template('errors/403.html'), 403

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return render_template('errors/500.html'), 500

    @app.errorhandler(413)
    def file_too_large(e):
        flash('File is too large. Maximum size is 16MB.', 'error')
        return redirect(request.referrer or request.url)


def register_hooks(app):
    """Register request/response hooks and context processors"""
    from utils.icons import render_icon
    from utils.queries import get_contact_info, QueryError

    app.jinja_env.globals['render_icon'] = render_icon

    @app.context_processor
    def inject_global_vars():
        """Navigation, footer links and defaults shared by every template"""

        def footer_contacts():
            # Footer failures must not break the page they sit on
            try:
                return get_contact_info()
            except QueryError as e:
                app.logger.warning(f"Footer contact links unavailable: {e.message}")
                return []

        default_meta = {
            'title': 'Portfolio',
            'description': 'Projects, experience and contact details.',
        }

        return {
            'nav_items': NAV_ITEMS,
            'current_endpoint': request.endpoint,
            'current_year': datetime.now().year,
            'footer_contacts': footer_contacts,
            'default_meta': default_meta,
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: blob: https:; "
            "frame-ancestors 'none';"
        )
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


# Create app instance for gunicorn
app = create_app()

if __name__ == '__main__':
    env = os.environ.get('FLASK_ENV', 'development')
    app.run(
        host='0.0.0.0',
        port=5000,
        debug=(env == 'development')
    )
