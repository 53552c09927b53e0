"""
Company registry services: DaData client and batch INN lookup.
"""

from .lookup import LookupEngine, format_outcomes, validate_identifier
from .registry import RegistryClient, RegistryError

__all__ = [
    "LookupEngine",
    "format_outcomes",
    "validate_identifier",
    "RegistryClient",
    "RegistryError",
]
