"""
Core exceptions for the credprovider package.

This module provides all exception classes used throughout the package,
organized by domain and with a clear inheritance hierarchy.
"""

# Base exceptions
from .base import (
    CredentialProviderError,
    ConfigurationError,
    NotFoundError
)

# Configuration loading exceptions
from .config import (
    ConfigLoadError,
    ConfigNotFoundError,
    ConfigReadError,
    NoConfigFilesError,
    ConfigSyntaxError,
    SchemaNotRegisteredError,
    StrictDecodingError,
    ConfigDecodeError,
    ProviderNotFoundError
)

__all__ = [
    # Base exceptions
    'CredentialProviderError',
    'ConfigurationError',
    'NotFoundError',
    'ProviderNotFoundError',

    # Configuration loading exceptions
    'ConfigLoadError',
    'ConfigNotFoundError',
    'ConfigReadError',
    'NoConfigFilesError',
    'ConfigSyntaxError',
    'SchemaNotRegisteredError',
    'StrictDecodingError',
    'ConfigDecodeError'
]
