"""
Configuration management system with domain-based architecture.

This module provides:
- Credential provider configuration loading, decoding and validation
- System-level settings and feature gates
- Core source, validation and registry infrastructure
"""

# Core infrastructure
from .core import (
    ConfigSource, FileConfigSource, RuntimeConfigSource,
    ConfigValidator, ErrorList, FieldError, AggregateValidationError
)

# Domain configurations
from .credential import (
    CredentialProviderConfig, CredentialProvider, ExecEnvVar, ServiceAccountTokenAttributes,
    SUPPORTED_PROVIDER_API_VERSIONS, read_credential_provider_config,
    load_credential_provider_config, validate_credential_provider_config
)

from .system import SystemConfig, LogLevel

from .core.registry import ConfigRegistry


def get_config_registry(system_config: SystemConfig = None) -> ConfigRegistry:
    """Create a configuration registry honouring the system feature gates."""
    if system_config is None:
        system_config = SystemConfig.from_env()
    return ConfigRegistry(system_config.sa_token_for_credential_providers)


__all__ = [
    # Core infrastructure
    'ConfigSource',
    'FileConfigSource',
    'RuntimeConfigSource',
    'ConfigValidator',
    'ErrorList',
    'FieldError',
    'AggregateValidationError',
    'ConfigRegistry',

    # Credential provider domain
    'CredentialProviderConfig',
    'CredentialProvider',
    'ExecEnvVar',
    'ServiceAccountTokenAttributes',
    'SUPPORTED_PROVIDER_API_VERSIONS',
    'read_credential_provider_config',
    'load_credential_provider_config',
    'validate_credential_provider_config',

    # System domain
    'SystemConfig',
    'LogLevel',

    # Convenience functions
    'get_config_registry'
]
