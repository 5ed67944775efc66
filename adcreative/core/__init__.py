"""
Core module - Configuration, errors, and domain models
"""

from .config import Config, ConfigService
from .errors import AdCreativeError

__all__ = ['Config', 'ConfigService', 'AdCreativeError']
