"""
Configuration package for the hotel management system.

Environment-driven settings live in :mod:`hotelms.config.settings`.
"""

from hotelms.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
