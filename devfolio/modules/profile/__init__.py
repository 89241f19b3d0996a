"""
Profile Module
==============

The portfolio owner's profile (name, title, bio, contact and social links).
Stored as a single row.
"""

from flask import Blueprint

profile_bp = Blueprint('profile', __name__, url_prefix='/api/profile')

from . import routes

__all__ = ['profile_bp']
