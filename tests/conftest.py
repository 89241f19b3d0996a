"""
Shared fixtures for the Devfolio test suite.

Every test gets its own SQLite file in a temporary directory so the
concurrency tests exercise real database locking.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from devfolio import Devfolio

ALLOWED_EMAIL = "owner@example.com"


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="devfolio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


def make_app(db_dir, features=None, **overrides):
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["SESSION_SECRET"] = "test-session-secret"
    app.config["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
    app.config["ALLOWED_EMAIL"] = ALLOWED_EMAIL
    app.config["CORS_ORIGINS"] = []
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(db_dir, "devfolio.db")
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
        "connect_args": {"check_same_thread": False, "timeout": 30},
    }
    app.config.update(overrides)

    config = {'features': features} if features else None
    Devfolio(app, config)
    return app


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with all Devfolio modules registered."""
    app = make_app(tmp_db_dir)
    yield app

    from devfolio.core import db
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def owner(app):
    """The allow-listed admin user, as if they had signed in once."""
    from devfolio.modules.auth import UserDatabase

    with app.app_context():
        user = UserDatabase.upsert_google_user(
            email=ALLOWED_EMAIL,
            name="Portfolio Owner",
            google_id="google-sub-1",
            avatar=None,
        )
        return user.id


@pytest.fixture
def auth_headers(app, owner):
    """Authorization header carrying a valid bearer token for the owner."""
    from devfolio.core import db
    from devfolio.modules.auth import User, generate_token

    with app.app_context():
        token = generate_token(db.session.get(User, owner))
    return {"Authorization": f"Bearer {token}"}
