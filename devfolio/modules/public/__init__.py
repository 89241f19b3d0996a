"""
Public Module
=============

Unauthenticated read endpoints used by the public portfolio page.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__, url_prefix='/api/public')

from . import routes

__all__ = ['public_bp']
