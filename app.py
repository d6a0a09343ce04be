"""
Neon Folio - Content API Entry Point
Application Factory Pattern for the portfolio content service

This module initializes the Flask application with its extensions,
configuration and middleware. Route handling is delegated to blueprints.
"""

import os
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from config import get_config
from extensions import db
from utils.dates import format_datetime, utcnow
from utils.errors import DuplicateKey, EmptyUpdate, NotFound, ValidationError

from blueprints.projects import projects_bp
from blueprints.blog import blog_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance

    Raises:
        ConfigurationError: required database settings are missing
    """

    app = Flask(__name__)

    # Load configuration, refusing to start half-configured
    conf = get_config(config_name)
    conf.validate()
    app.config.from_object(conf)
    app.config['CORS_ORIGINS'] = conf.allowed_origins()
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    initialize_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_hooks(app)

    # Liveness only, storage is not queried
    @app.route('/api/health')
    def health_check():
        return jsonify({'status': 'ok', 'timestamp': format_datetime(utcnow())}), 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(projects_bp)
    app.register_blueprint(blog_bp)


def register_error_handlers(app):
    """Translate domain errors into JSON responses without leaking storage details"""

    @app.errorhandler(NotFound)
    def not_found(e):
        return jsonify({'error': str(e)}), 404

    @app.errorhandler(DuplicateKey)
    def duplicate_key(e):
        return jsonify({'error': str(e), 'field': e.field}), 409

    @app.errorhandler(ValidationError)
    def validation_error(e):
        body = {'error': str(e)}
        if e.field:
            body['field'] = e.field
        return jsonify(body), 400

    @app.errorhandler(EmptyUpdate)
    def empty_update(e):
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(413)
    def payload_too_large(e):
        limit_mb = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return jsonify({'error': f'Request body too large. Maximum size is {limit_mb}MB.'}), 413

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'error': e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.error(f"Server Error on {request.method} {request.path}: {str(e)}", exc_info=e)
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500


def register_hooks(app):
    """Register request/response hooks"""

    @app.after_request
    def apply_cors(response):
        """Echo CORS headers for configured origins only"""
        origin = request.headers.get('Origin')
        if origin and origin in app.config['CORS_ORIGINS']:
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE'
            response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
            response.vary.add('Origin')
        return response

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response


if __name__ == '__main__':
    env = os.environ.get('FLASK_ENV', 'development')
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('API_PORT', 3001)),
        debug=(env == 'development')
    )
