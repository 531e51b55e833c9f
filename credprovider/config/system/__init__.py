"""
System configuration domain.

This module provides the package's own settings: logging and feature gates.
"""

from .config import SystemConfig, LogLevel, KNOWN_FEATURE_GATES, parse_feature_gates

__all__ = [
    'SystemConfig',
    'LogLevel',
    'KNOWN_FEATURE_GATES',
    'parse_feature_gates'
]
