from flask import request, jsonify, g
from devfolio.core import logger
from devfolio.core.database import db
from . import auth_bp
from .utils import verify_google_token, generate_token, require_auth


@auth_bp.route('/google', methods=['POST'])
def google_signin():
    """Google Sign-In endpoint - receives the ID token from the client"""
    data = request.get_json(silent=True) or {}
    id_token = data.get('idToken')

    if not id_token or not isinstance(id_token, str):
        return jsonify({'error': 'ID token required'}), 400

    try:
        user = verify_google_token(id_token)
        if not user:
            return jsonify({'error': 'Unauthorized email'}), 401

        token = generate_token(user)
    except Exception as e:
        db.session.rollback()
        logger.log_error_with_traceback('auth', e)
        return jsonify({'error': 'Authentication failed'}), 500

    logger.log_user_action('auth', 'google_signin', user_id=user.id)
    return jsonify({'token': token, 'user': user.to_dict()})


@auth_bp.route('/user', methods=['GET'])
@require_auth
def current_user():
    """Get current user"""
    return jsonify(g.current_user.to_dict())


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Tokens are stateless; the client drops its copy"""
    return jsonify({'success': True})
