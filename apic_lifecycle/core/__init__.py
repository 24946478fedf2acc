"""
Core Libraries

Shared configuration, authentication and utilities for the APIC Lifecycle tool.
"""

from .auth import ApicAuth
from .config import ConfigManager, LifecycleConfig
from .exceptions import LifecycleError, AuthenticationError, ConfigurationError
from .utils import setup_logging

__all__ = [
    'ApicAuth',
    'ConfigManager',
    'LifecycleConfig',
    'LifecycleError',
    'AuthenticationError',
    'ConfigurationError',
    'setup_logging'
]
