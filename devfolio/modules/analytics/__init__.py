"""
Analytics Module
================

View/click counters for the portfolio.

Public endpoints (no auth) record page views, project clicks and contact
inquiries; admin endpoints read the aggregate and the daily view ledger
for the dashboard chart.
"""

from flask import Blueprint

analytics_bp = Blueprint('analytics', __name__, url_prefix='/api/analytics')

from . import routes
from .counters import CounterService

__all__ = ['analytics_bp', 'CounterService']
