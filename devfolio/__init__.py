"""
Devfolio - Portfolio Site Backend
=================================

A Flask JSON API for a single-owner portfolio site:
- Projects, skills, profile and settings managed from an admin dashboard
- Google Sign-In restricted to one allow-listed account
- Public read endpoints for the portfolio page
- Visit, project-click and contact counters with a daily views ledger
- Project preview uploads to Cloudinary

Usage:
    from flask import Flask
    from devfolio import Devfolio

    app = Flask(__name__)
    Devfolio(app)

    # or switch modules off
    Devfolio(app, {'features': {'upload': False}})
"""

import logging
from flask import jsonify, request
from werkzeug.exceptions import HTTPException
from flask_cors import CORS

from .core import Config, Database

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

# Module name -> (import path, blueprint attribute), in registration order
MODULES = {
    'auth': ('devfolio.modules.auth', 'auth_bp'),
    'projects': ('devfolio.modules.projects', 'projects_bp'),
    'skills': ('devfolio.modules.skills', 'skills_bp'),
    'profile': ('devfolio.modules.profile', 'profile_bp'),
    'settings': ('devfolio.modules.settings', 'settings_bp'),
    'analytics': ('devfolio.modules.analytics', 'analytics_bp'),
    'public': ('devfolio.modules.public', 'public_bp'),
    'upload': ('devfolio.modules.upload', 'upload_bp'),
}

# Copied into app.config when the app has not set them
CONFIG_DEFAULTS = (
    'SECRET_KEY', 'SESSION_SECRET', 'TOKEN_EXPIRY_DAYS', 'DATABASE_URL',
    'GOOGLE_CLIENT_ID', 'ALLOWED_EMAIL', 'CLOUDINARY_CLOUD_NAME', 'CLOUDINARY_API_KEY',
    'CLOUDINARY_API_SECRET', 'CLOUDINARY_FOLDER', 'UPLOAD_MAX_BYTES', 'CORS_ORIGINS',
    'LOG_DB_LEVEL',
)


class Devfolio:
    """Flask extension that wires every Devfolio module into an app."""

    def __init__(self, app=None, config=None):
        self.config = config or {}
        self.features = {name: True for name in MODULES}
        self.features.update(self.config.get('features', {}))
        self._registered = []

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key in CONFIG_DEFAULTS:
            if app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        # Import enabled modules first so their models exist before create_all
        blueprints = []
        for name, (path, attr) in MODULES.items():
            if not self.features.get(name):
                continue
            module = __import__(path, fromlist=[attr])
            blueprints.append((name, getattr(module, attr)))

        Database.init_app(app)

        origins = app.config.get('CORS_ORIGINS')
        if origins:
            CORS(app, resources={r'/api/*': {'origins': origins}})

        from .core.health import health_bp
        app.register_blueprint(health_bp)

        for name, blueprint in blueprints:
            app.register_blueprint(blueprint)
            self._registered.append(name)

        self._register_error_handlers(app)

        app.extensions['devfolio'] = self
        logger.info(f"Devfolio initialised with modules: {', '.join(self._registered)}")

    @staticmethod
    def _register_error_handlers(app):
        """JSON bodies for HTTP errors raised under /api"""

        @app.errorhandler(HTTPException)
        def handle_http_error(e):
            if not request.path.startswith('/api/'):
                return e
            return jsonify({'error': e.description or e.name}), e.code

    def get_registered_modules(self):
        return list(self._registered)


__all__ = ['Devfolio', '__version__']
