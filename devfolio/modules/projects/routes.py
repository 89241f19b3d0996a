"""
Projects Admin Routes
=====================

CRUD for portfolio projects. The public listing reuses
get_all_projects_db() from this module.
"""

from flask import request, jsonify
from sqlalchemy import select
from devfolio.core import db, logger, ValidationError
from devfolio.core.validation import clean_payload, string_field, string_list_field
from devfolio.modules.auth import require_auth
from . import projects_bp
from .models import Project

PROJECT_FIELDS = {
    'title': lambda d, k: string_field(d, k),
    'description': lambda d, k: string_field(d, k),
    'imageUrl': lambda d, k: string_field(d, k),
    'link': lambda d, k: string_field(d, k),
    'tags': lambda d, k: string_list_field(d, k, required=False) or [],
}

# camelCase body key -> model attribute
_COLUMNS = {'title': 'title', 'description': 'description', 'imageUrl': 'image_url',
            'link': 'link', 'tags': 'tags'}

# ===== Database Helper Functions =====

def get_all_projects_db():
    """Get all projects, newest first"""
    return db.session.execute(
        select(Project).order_by(Project.created_at.desc(), Project.id.desc())
    ).scalars().all()


def get_project_db(project_id):
    return db.session.get(Project, project_id)


def create_project_db(data):
    """Create new project in database"""
    project = Project(**{_COLUMNS[k]: v for k, v in data.items()})
    db.session.add(project)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return project


def update_project_db(project_id, data):
    """Update existing project. Returns None if it does not exist."""
    project = db.session.get(Project, project_id)
    if not project:
        return None

    for key, value in data.items():
        setattr(project, _COLUMNS[key], value)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return project


def delete_project_db(project_id):
    project = db.session.get(Project, project_id)
    if not project:
        return False
    db.session.delete(project)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return True

# ===== Routes =====

@projects_bp.route('', methods=['GET'])
@require_auth
def get_projects():
    """Get all projects"""
    try:
        return jsonify([p.to_dict() for p in get_all_projects_db()])
    except Exception as e:
        logger.log_error_with_traceback('projects', e)
        return jsonify({'error': 'Failed to fetch projects'}), 500


@projects_bp.route('/<int:project_id>', methods=['GET'])
@require_auth
def get_project(project_id):
    """Get single project"""
    try:
        project = get_project_db(project_id)
    except Exception as e:
        logger.log_error_with_traceback('projects', e)
        return jsonify({'error': 'Failed to fetch project'}), 500

    if not project:
        return jsonify({'error': 'Project not found'}), 404
    return jsonify(project.to_dict())


@projects_bp.route('', methods=['POST'])
@require_auth
def create_project():
    """Create new project"""
    try:
        data = clean_payload(request.get_json(silent=True), PROJECT_FIELDS)
        project = create_project_db(data)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('projects', e)
        return jsonify({'error': 'Failed to create project'}), 500

    logger.log_user_action('projects', f"Created project {project.id}")
    return jsonify(project.to_dict()), 201


@projects_bp.route('/<int:project_id>', methods=['PATCH'])
@require_auth
def update_project(project_id):
    """Update project"""
    try:
        data = clean_payload(request.get_json(silent=True), PROJECT_FIELDS, partial=True)
        project = update_project_db(project_id, data)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('projects', e)
        return jsonify({'error': 'Failed to update project'}), 500

    if not project:
        return jsonify({'error': 'Project not found'}), 404
    return jsonify(project.to_dict())


@projects_bp.route('/<int:project_id>', methods=['DELETE'])
@require_auth
def delete_project(project_id):
    """Delete project"""
    try:
        success = delete_project_db(project_id)
    except Exception as e:
        logger.log_error_with_traceback('projects', e)
        return jsonify({'error': 'Failed to delete project'}), 500

    if not success:
        return jsonify({'error': 'Project not found'}), 404

    logger.log_user_action('projects', f"Deleted project {project_id}")
    return '', 204
