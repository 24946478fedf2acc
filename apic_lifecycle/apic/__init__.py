"""
APIC Libraries

Wraps the apic management CLI and implements the product lifecycle operations.
"""

from .client import ApicClient, CatalogTarget, CommandResult
from .mapping import MappingFile, build_plan_mapping, build_state_mapping
from .operations import ProductOperations
from .resolver import ProductResolver

__all__ = [
    'ApicClient',
    'CatalogTarget',
    'CommandResult',
    'MappingFile',
    'build_plan_mapping',
    'build_state_mapping',
    'ProductOperations',
    'ProductResolver'
]
