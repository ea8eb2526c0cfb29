"""
Common utilities and infrastructure for the grid reference conversion system.

This package provides foundational components used across all modules:
- Geodetic constants with provenance
- Unit registry and quantity handling
- Logging infrastructure
"""

from common.constants import Constant, GeodeticConstants
from common.units import ureg, Q_, magnitude_in
from common.logging_config import get_logger

__all__ = [
    "Constant",
    "GeodeticConstants",
    "ureg",
    "Q_",
    "magnitude_in",
    "get_logger",
]
