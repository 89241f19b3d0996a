"""
Devfolio Modules
================

One Flask blueprint per feature, registered by the Devfolio extension.
"""

__all__ = ['analytics', 'auth', 'profile', 'projects', 'public', 'settings', 'skills', 'upload']
