"""
Settings Module
===============

Site-wide links shown on the public page (GitHub, LinkedIn, resume, email).
Stored as a single row.
"""

from flask import Blueprint

settings_bp = Blueprint('settings', __name__, url_prefix='/api/settings')

from . import routes
from .database import get_settings, update_settings

__all__ = ['settings_bp', 'get_settings', 'update_settings']
