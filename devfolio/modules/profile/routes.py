from flask import request, jsonify
from sqlalchemy import select
from devfolio.core import db, logger, ValidationError
from devfolio.core.validation import clean_payload, string_field
from devfolio.modules.auth import require_auth
from . import profile_bp
from .models import Profile

PROFILE_FIELDS = {
    'name': lambda d, k: string_field(d, k),
    'title': lambda d, k: string_field(d, k),
    'bio': lambda d, k: string_field(d, k),
    'email': lambda d, k: string_field(d, k),
    'github': lambda d, k: string_field(d, k, required=False, allow_empty=True),
    'linkedin': lambda d, k: string_field(d, k, required=False, allow_empty=True),
    'twitter': lambda d, k: string_field(d, k, required=False, allow_empty=True),
}


def get_profile_db():
    return db.session.execute(select(Profile).order_by(Profile.id).limit(1)).scalar_one_or_none()


def update_profile_db(data):
    """Replace the profile, creating it if this is the first save"""
    profile = get_profile_db()
    if profile:
        for key, value in data.items():
            setattr(profile, key, value)
    else:
        profile = Profile(**data)
        db.session.add(profile)

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return profile


@profile_bp.route('', methods=['GET'])
@require_auth
def get_profile():
    try:
        profile = get_profile_db()
    except Exception as e:
        logger.log_error_with_traceback('profile', e)
        return jsonify({'error': 'Failed to fetch profile'}), 500
    return jsonify(profile.to_dict() if profile else None)


@profile_bp.route('', methods=['PUT'])
@require_auth
def update_profile():
    try:
        data = clean_payload(request.get_json(silent=True), PROFILE_FIELDS)
        profile = update_profile_db(data)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('profile', e)
        return jsonify({'error': 'Failed to update profile'}), 500

    logger.log_user_action('profile', 'Updated profile')
    return jsonify(profile.to_dict())
