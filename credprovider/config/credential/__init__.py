"""
Credential provider configuration domain.

This module provides the credential provider data model, the versioned
document schemas, the loader and the validator.
"""

from .config import (
    CredentialProviderConfig, CredentialProvider, ExecEnvVar, ServiceAccountTokenAttributes,
    CREDENTIAL_PROVIDER_CONFIG_KIND, CONFIG_API_VERSION_V1ALPHA1, CONFIG_API_VERSION_V1BETA1,
    CONFIG_API_VERSION_V1, PROVIDER_API_VERSION_V1ALPHA1, PROVIDER_API_VERSION_V1BETA1,
    PROVIDER_API_VERSION_V1, SUPPORTED_PROVIDER_API_VERSIONS, TOKEN_ATTRIBUTES_API_VERSION,
    SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE
)
from .schema import (
    CredentialProviderConfigSchema, CredentialProviderConfigV1Alpha1,
    CredentialProviderConfigV1Beta1, CredentialProviderConfigV1,
    decode_document, get_schema, list_supported_config_versions
)
from .loader import (
    load_credential_provider_config, read_credential_provider_config, parse_document
)
from .validation import CredentialProviderConfigValidator, validate_credential_provider_config

__all__ = [
    # Configuration classes
    'CredentialProviderConfig',
    'CredentialProvider',
    'ExecEnvVar',
    'ServiceAccountTokenAttributes',

    # Versions
    'CREDENTIAL_PROVIDER_CONFIG_KIND',
    'CONFIG_API_VERSION_V1ALPHA1',
    'CONFIG_API_VERSION_V1BETA1',
    'CONFIG_API_VERSION_V1',
    'PROVIDER_API_VERSION_V1ALPHA1',
    'PROVIDER_API_VERSION_V1BETA1',
    'PROVIDER_API_VERSION_V1',
    'SUPPORTED_PROVIDER_API_VERSIONS',
    'TOKEN_ATTRIBUTES_API_VERSION',
    'SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE',

    # Schemas
    'CredentialProviderConfigSchema',
    'CredentialProviderConfigV1Alpha1',
    'CredentialProviderConfigV1Beta1',
    'CredentialProviderConfigV1',
    'decode_document',
    'get_schema',
    'list_supported_config_versions',

    # Loading and validation
    'load_credential_provider_config',
    'read_credential_provider_config',
    'parse_document',
    'CredentialProviderConfigValidator',
    'validate_credential_provider_config'
]
