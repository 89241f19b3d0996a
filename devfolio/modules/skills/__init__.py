"""
Skills Module
=============

Admin API for the skills shown on the portfolio home page.

Provides:
- Skill creation, editing and deletion
- Drag-and-drop reordering (the whole list is re-numbered in one transaction)
"""

from flask import Blueprint

skills_bp = Blueprint('skills', __name__, url_prefix='/api/skills')

from . import routes
from .service import SkillService

__all__ = ['skills_bp', 'SkillService']
