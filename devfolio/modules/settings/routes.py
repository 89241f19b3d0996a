"""
Settings Admin Routes
=====================

Read and save the public site links.
"""

from flask import request, jsonify
from devfolio.core import logger, ValidationError
from devfolio.core.validation import require_json_object, string_field
from devfolio.modules.auth import require_auth
from . import settings_bp
from .database import get_settings, update_settings, SETTINGS_FIELDS


def parse_settings(data):
    """All fields optional; empty strings are stored as given"""
    require_json_object(data)
    values = {}
    for key, column in SETTINGS_FIELDS.items():
        if key in data:
            values[column] = string_field(data, key, required=False, allow_empty=True)
    return values


@settings_bp.route('', methods=['GET'])
@require_auth
def api_get_settings():
    """API endpoint to get the settings"""
    try:
        settings = get_settings()
    except Exception as e:
        logger.log_error_with_traceback('settings', e)
        return jsonify({'error': 'Failed to fetch settings'}), 500
    return jsonify(settings.to_dict() if settings else None)


@settings_bp.route('', methods=['PUT'])
@require_auth
def api_save_settings():
    """API endpoint to save the settings"""
    try:
        values = parse_settings(request.get_json(silent=True))
        settings = update_settings(values)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('settings', e)
        return jsonify({'error': 'Failed to update settings'}), 500

    logger.log_user_action('settings', 'Saved settings', details={'fields': sorted(values)})
    return jsonify(settings.to_dict())
