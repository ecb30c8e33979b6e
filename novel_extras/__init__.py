import logging
import os
import sys

from flask import Flask, jsonify
from flask.logging import default_handler
from werkzeug.exceptions import InternalServerError

from .extensions import db, migrate
from .config import DevConfig, ProdConfig

_log_handler = logging.StreamHandler(sys.stdout)
_log_handler.setFormatter(logging.Formatter(
    '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
))


def _configure_logging(app):
    """Set up structured logging for production."""
    level = logging.INFO if not app.debug else logging.DEBUG
    # app.logger is the package logger, shared by every app instance
    app.logger.setLevel(level)
    app.logger.removeHandler(default_handler)
    app.logger.addHandler(_log_handler)
    logging.getLogger('gunicorn.error').setLevel(level)


def _register_error_handlers(app):
    from .api.common import BadRequest

    @app.errorhandler(BadRequest)
    def handle_bad_request(e):
        return jsonify({'error': e.message}), 400

    @app.errorhandler(InternalServerError)
    def handle_internal_error(e):
        # Anything left half-written by the failed request is discarded.
        db.session.rollback()
        app.logger.error('Unhandled error', exc_info=e.original_exception or e)
        return jsonify({'error': 'Internal server error'}), 500


def create_app(config=None):
    app = Flask(__name__, static_folder=None)

    if config is None:
        config = ProdConfig if os.environ.get('FLASK_ENV') == 'production' else DevConfig
    app.config.from_object(config)

    _configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so they are registered with SQLAlchemy (needed for migrations)
    from . import models  # noqa: F401

    from flask_cors import CORS
    CORS(app, origins=app.config['CORS_ORIGINS'], max_age=3600)

    # Register blueprints
    from .api import register_blueprints
    register_blueprints(app)

    _register_error_handlers(app)

    @app.cli.command('init-db')
    def init_db():
        """Create any missing tables."""
        db.create_all()
        app.logger.info('Database tables created')

    # Health check endpoint (used by load balancers and CI)
    @app.route('/healthz')
    def health_check():
        try:
            db.session.execute(db.text('SELECT 1'))
            return jsonify(status='healthy'), 200
        except Exception:
            app.logger.exception('Health check failed')
            return jsonify(status='unhealthy'), 503

    return app
