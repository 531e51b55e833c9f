"""Credential provider configuration loading and validation."""

from credprovider.config import (
    ConfigRegistry, CredentialProviderConfig, CredentialProvider, ExecEnvVar,
    ServiceAccountTokenAttributes, SystemConfig, AggregateValidationError,
    read_credential_provider_config, validate_credential_provider_config, get_config_registry
)
from credprovider.core.exceptions import CredentialProviderError, ConfigLoadError

__version__ = "0.1.0"

__all__ = [
    'ConfigRegistry',
    'CredentialProviderConfig',
    'CredentialProvider',
    'ExecEnvVar',
    'ServiceAccountTokenAttributes',
    'SystemConfig',
    'AggregateValidationError',
    'CredentialProviderError',
    'ConfigLoadError',
    'read_credential_provider_config',
    'validate_credential_provider_config',
    'get_config_registry'
]
