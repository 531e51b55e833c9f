"""
Core configuration management components.

This module provides the foundational components for configuration management:
- ConfigSource: Abstract source interface and implementations
- ConfigValidator: Validation framework producing structured field errors

ConfigRegistry lives in ``registry`` and is exported from ``credprovider.config``.
"""

from .source import ConfigSource, FileConfigSource, RuntimeConfigSource, RawDocument, SUPPORTED_EXTENSIONS
from .validator import (
    ConfigValidator, ErrorList, FieldError, FieldPath, AggregateValidationError, OMIT_VALUE
)

__all__ = [
    # Sources
    'ConfigSource',
    'FileConfigSource',
    'RuntimeConfigSource',
    'RawDocument',
    'SUPPORTED_EXTENSIONS',

    # Validators
    'ConfigValidator',
    'ErrorList',
    'FieldError',
    'FieldPath',
    'AggregateValidationError',
    'OMIT_VALUE'
]
