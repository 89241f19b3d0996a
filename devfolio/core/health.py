"""
Public /health endpoint for uptime monitors (no auth).
"""

from datetime import datetime, timezone
from flask import Blueprint, jsonify
from .database import Database

health_bp = Blueprint('health', __name__, url_prefix='/health')


def _build_health_response():
    """Build the health check response dict."""
    ok, detail = Database.ping()
    database = {'ok': ok}
    if ok:
        database['dialect'] = detail
    else:
        database['error'] = detail

    status = 'ok' if ok else 'critical'
    result = {
        'status': status,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'checks': {
            'database': database,
        },
    }
    return result, status


@health_bp.route('/')
@health_bp.route('')
def health_check():
    """Public health endpoint for uptime monitors."""
    data, status = _build_health_response()
    code = 503 if status == 'critical' else 200
    return jsonify(data), code
