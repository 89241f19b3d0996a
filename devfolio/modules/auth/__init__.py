"""
Devfolio Auth Module

Single-user authentication:
- Google Sign-In (ID token exchange), restricted to ALLOWED_EMAIL
- Bearer tokens for the admin API
- require_auth decorator used by every admin module
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

from . import routes
from .database import User, UserDatabase
from .utils import require_auth, generate_token, GoogleTokenVerifier

__all__ = ['auth_bp', 'User', 'UserDatabase', 'require_auth', 'generate_token', 'GoogleTokenVerifier']
