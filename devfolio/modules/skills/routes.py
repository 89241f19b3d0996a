"""
Skills Admin Routes
===================

CRUD for skills plus the drag-and-drop reorder endpoint.
"""

from flask import request, jsonify
from devfolio.core import logger, ValidationError
from devfolio.core.validation import clean_payload, string_field, int_field
from devfolio.modules.auth import require_auth
from . import skills_bp
from .service import SkillService

SKILL_FIELDS = {
    'name': lambda d, k: string_field(d, k),
    'level': lambda d, k: int_field(d, k, minimum=0, maximum=100),
    'category': lambda d, k: string_field(d, k, required=False) or 'Other',
}


def parse_skill_ids(data):
    """Extract skillIds from the reorder body"""
    skill_ids = data.get('skillIds') if isinstance(data, dict) else None
    if not isinstance(skill_ids, list):
        raise ValidationError('skillIds must be an array')
    if any(isinstance(i, bool) or not isinstance(i, int) for i in skill_ids):
        raise ValidationError('skillIds must contain only integer ids')
    return skill_ids


@skills_bp.route('', methods=['GET'])
@require_auth
def get_skills():
    """Get all skills in display order"""
    try:
        skills = SkillService.list_skills()
        return jsonify([s.to_dict() for s in skills])
    except Exception as e:
        logger.log_error_with_traceback('skills', e)
        return jsonify({'error': 'Failed to fetch skills'}), 500


@skills_bp.route('', methods=['POST'])
@require_auth
def create_skill():
    """Create a skill at the end of the list"""
    try:
        data = clean_payload(request.get_json(silent=True), SKILL_FIELDS)
        skill = SkillService.create_skill(data)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('skills', e)
        return jsonify({'error': 'Failed to create skill'}), 500

    logger.log_user_action('skills', f"Created skill {skill.id}")
    return jsonify(skill.to_dict()), 201


@skills_bp.route('/<int:skill_id>', methods=['PATCH'])
@require_auth
def update_skill(skill_id):
    """Update name, level or category"""
    try:
        data = clean_payload(request.get_json(silent=True), SKILL_FIELDS, partial=True)
        skill = SkillService.update_skill(skill_id, data)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('skills', e)
        return jsonify({'error': 'Failed to update skill'}), 500

    if not skill:
        return jsonify({'error': 'Skill not found'}), 404
    return jsonify(skill.to_dict())


@skills_bp.route('/<int:skill_id>', methods=['DELETE'])
@require_auth
def delete_skill(skill_id):
    """Delete skill"""
    try:
        success = SkillService.delete_skill(skill_id)
    except Exception as e:
        logger.log_error_with_traceback('skills', e)
        return jsonify({'error': 'Failed to delete skill'}), 500

    if not success:
        return jsonify({'error': 'Skill not found'}), 404

    logger.log_user_action('skills', f"Deleted skill {skill_id}")
    return '', 204


@skills_bp.route('/reorder', methods=['POST'])
@require_auth
def reorder_skills():
    """Persist a new display order: {"skillIds": [3, 1, 2]}"""
    try:
        skill_ids = parse_skill_ids(request.get_json(silent=True))
        updated = SkillService.reorder(skill_ids)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('skills', e)
        return jsonify({'error': 'Failed to reorder skills'}), 500

    if updated < len(set(skill_ids)):
        logger.debug('skills', f"Reorder ignored {len(set(skill_ids)) - updated} unknown skill ids")
    return jsonify({'success': True})
