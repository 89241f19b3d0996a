"""
Devfolio Core
=============

Core utilities and shared functionality for Devfolio modules.
"""

from .config import Config, get_config_value
from .database import Database, db
from .errors import DevfolioError, ValidationError, AuthError, UploadError
from .logging_service import LoggingService, logger

__all__ = [
    'Config', 'get_config_value', 'Database', 'db', 'LoggingService', 'logger',
    'DevfolioError', 'ValidationError', 'AuthError', 'UploadError',
]
