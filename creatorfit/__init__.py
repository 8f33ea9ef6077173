"""
Flask application factory.

Creates and configures the app, registers all blueprints. Static files (the
sign-up, connect, dashboard and admin pages) are served from ./public.
"""
import os

from flask import Flask


def create_app():
    """Create and configure the Flask application."""
    from creatorfit.config import SECRET_KEY
    from creatorfit.logging_config import configure_logging

    app = Flask(
        __name__,
        static_folder=os.path.join(os.path.dirname(os.path.dirname(__file__)), 'public'),
        static_url_path='',
    )

    configure_logging(app)

    app.secret_key = SECRET_KEY
    app.config['MAX_CONTENT_LENGTH'] = 1024 * 1024

    # Register blueprints
    from creatorfit.routes.lead import bp as lead_bp
    from creatorfit.routes.oauth import bp as oauth_bp
    from creatorfit.routes.creator import bp as creator_bp
    from creatorfit.routes.admin import bp as admin_bp
    from creatorfit.routes.health import bp as health_bp

    app.register_blueprint(lead_bp)
    app.register_blueprint(oauth_bp)
    app.register_blueprint(creator_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(health_bp)

    @app.after_request
    def security_headers(response):
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'SAMEORIGIN')
        response.headers.setdefault('Referrer-Policy', 'no-referrer')
        return response

    # Circuit breakers for outbound API calls
    from creatorfit.extensions import redis_client
    from creatorfit.services.circuit_breaker import init_breakers
    init_breakers(redis_client)

    # Models must be imported so Base.metadata knows every table.
    # Schema is managed by Alembic; no create_all() here.
    from creatorfit.database import import_models
    import_models()

    return app
