"""
Configuration module - Frozen, environment-driven base settings.
"""

from common.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
