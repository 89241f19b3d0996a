"""
Public Routes
=============

Skills, projects and site settings for the home page. No auth.
"""

from flask import jsonify
from devfolio.core import logger
from devfolio.modules.skills.service import SkillService
from devfolio.modules.projects.routes import get_all_projects_db
from devfolio.modules.settings.database import get_settings
from . import public_bp


@public_bp.route('/skills')
def public_skills():
    """Public skills endpoint for home page"""
    try:
        return jsonify([s.to_dict() for s in SkillService.list_skills()])
    except Exception as e:
        logger.log_error_with_traceback('public', e)
        return jsonify({'error': 'Failed to fetch skills'}), 500


@public_bp.route('/projects')
def public_projects():
    """Public projects endpoint for home page"""
    try:
        return jsonify([p.to_dict() for p in get_all_projects_db()])
    except Exception as e:
        logger.log_error_with_traceback('public', e)
        return jsonify({'error': 'Failed to fetch projects'}), 500


@public_bp.route('/settings')
def public_settings():
    """Public settings endpoint for home page"""
    try:
        settings = get_settings()
    except Exception as e:
        logger.log_error_with_traceback('public', e)
        return jsonify({'error': 'Failed to fetch settings'}), 500
    return jsonify(settings.to_dict() if settings else None)
