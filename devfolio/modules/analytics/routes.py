from flask import jsonify, request
from devfolio.core import logger, ValidationError
from devfolio.core.validation import require_json_object, int_field
from devfolio.modules.auth import require_auth
from . import analytics_bp
from .counters import CounterService
from .models import COUNTER_FIELDS, MAX_COUNTER


def add_no_cache_headers(response):
    """Add headers to prevent browser caching of analytics data"""
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response


def parse_analytics_update(data):
    """Map the camelCase body onto counter columns, keeping only supplied keys"""
    require_json_object(data)
    values = {}
    for key, column in COUNTER_FIELDS.items():
        if key in data:
            values[column] = int_field(data, key, minimum=0, maximum=MAX_COUNTER)
    return values


# ===== Admin =====

@analytics_bp.route('', methods=['GET'])
@require_auth
def get_analytics():
    """Get the aggregate counters (created with zeros on first access)"""
    try:
        analytics = CounterService.get_analytics()
        return add_no_cache_headers(jsonify(analytics.to_dict()))
    except Exception as e:
        logger.log_error_with_traceback('analytics', e)
        return jsonify({'error': 'Failed to fetch analytics'}), 500


@analytics_bp.route('/daily-views', methods=['GET'])
@require_auth
def get_daily_views():
    """Get daily views for the dashboard chart, oldest first"""
    days = CounterService.parse_days(request.args.get('days'))
    try:
        rows = CounterService.get_daily_views(days)
        return add_no_cache_headers(jsonify([r.to_dict() for r in rows]))
    except Exception as e:
        logger.log_error_with_traceback('analytics', e)
        return jsonify({'error': 'Failed to fetch daily views'}), 500


@analytics_bp.route('', methods=['PUT'])
@require_auth
def update_analytics():
    """Overwrite counters, including the previous-month snapshot"""
    try:
        values = parse_analytics_update(request.get_json(silent=True))
        analytics = CounterService.update_analytics(values)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.log_error_with_traceback('analytics', e)
        return jsonify({'error': 'Failed to update analytics'}), 500

    logger.log_user_action('analytics', 'Updated analytics counters', details={'fields': sorted(values)})
    return jsonify(analytics.to_dict())


# ===== Public =====

@analytics_bp.route('/view', methods=['POST'])
def increment_view():
    """Increment view count (public endpoint)"""
    try:
        CounterService.increment_view()
    except Exception as e:
        logger.log_error_with_traceback('analytics', e)
        return jsonify({'error': 'Failed to increment view'}), 500
    return jsonify({'success': True})


@analytics_bp.route('/project-click', methods=['POST'])
def increment_project_click():
    """Increment project click count (public endpoint)"""
    try:
        analytics = CounterService.increment_project_click()
        return jsonify(analytics.to_dict())
    except Exception as e:
        logger.log_error_with_traceback('analytics', e)
        return jsonify({'error': 'Failed to increment project click'}), 500


@analytics_bp.route('/contact', methods=['POST'])
def increment_contact_inquiry():
    """Increment contact inquiry count (public endpoint)"""
    try:
        analytics = CounterService.increment_contact_inquiry()
        return jsonify(analytics.to_dict())
    except Exception as e:
        logger.log_error_with_traceback('analytics', e)
        return jsonify({'error': 'Failed to increment contact inquiry'}), 500
