"""
APIC Lifecycle

Automates API product lifecycle operations (publish, supersede, replace,
deprecate, retire) against IBM API Connect through the apic CLI.
"""

__version__ = "1.0.0"

from .main_app import LifecycleManager, create_lifecycle_manager, main

__all__ = [
    'LifecycleManager',
    'create_lifecycle_manager',
    'main'
]
