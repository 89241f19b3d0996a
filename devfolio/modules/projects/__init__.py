"""
Projects Admin Module
=====================

Admin API for the project portfolio.

Provides:
- Project creation, editing and deletion
- Tags stored as a JSON list
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes

__all__ = ['projects_bp']
