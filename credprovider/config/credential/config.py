"""
Credential provider domain configuration classes.

This module defines the version-neutral in-memory shape that every supported
schema version decodes into. Validation runs against these classes only.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from credprovider.outils.time_parser import format_duration


# Envelope (document) identifiers
CREDENTIAL_PROVIDER_CONFIG_KIND = "CredentialProviderConfig"
CONFIG_GROUP = "kubelet.config.k8s.io"
CONFIG_API_VERSION_V1ALPHA1 = f"{CONFIG_GROUP}/v1alpha1"
CONFIG_API_VERSION_V1BETA1 = f"{CONFIG_GROUP}/v1beta1"
CONFIG_API_VERSION_V1 = f"{CONFIG_GROUP}/v1"

# Wire-protocol versions spoken by provider plugins
PROVIDER_GROUP = "credentialprovider.kubelet.k8s.io"
PROVIDER_API_VERSION_V1ALPHA1 = f"{PROVIDER_GROUP}/v1alpha1"
PROVIDER_API_VERSION_V1BETA1 = f"{PROVIDER_GROUP}/v1beta1"
PROVIDER_API_VERSION_V1 = f"{PROVIDER_GROUP}/v1"

SUPPORTED_PROVIDER_API_VERSIONS = tuple(sorted([
    PROVIDER_API_VERSION_V1ALPHA1,
    PROVIDER_API_VERSION_V1BETA1,
    PROVIDER_API_VERSION_V1,
]))

# Only this provider version accepts tokenAttributes
TOKEN_ATTRIBUTES_API_VERSION = PROVIDER_API_VERSION_V1

SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE = "KubeletServiceAccountTokenForCredentialProviders"


@dataclass
class ExecEnvVar:
    """Environment variable passed to a provider plugin."""
    name: str
    value: str


@dataclass
class ServiceAccountTokenAttributes:
    """
    Settings for the service account token passed to a provider plugin.

    ``require_service_account`` is tri-state: None means it was not set,
    which validation reports as a missing required value.
    """
    service_account_token_audience: str = ""
    require_service_account: Optional[bool] = None
    required_service_account_annotation_keys: List[str] = field(default_factory=list)
    optional_service_account_annotation_keys: List[str] = field(default_factory=list)


@dataclass
class CredentialProvider:
    """A single external credential provider plugin and the images it serves."""
    name: str = ""
    match_images: List[str] = field(default_factory=list)
    default_cache_duration: Optional[timedelta] = None
    api_version: str = ""
    args: List[str] = field(default_factory=list)
    env: List[ExecEnvVar] = field(default_factory=list)
    token_attributes: Optional[ServiceAccountTokenAttributes] = None

    def to_dict(self) -> dict:
        """Convert to the camelCase document shape, with the duration written as a string."""
        data = {
            'name': self.name,
            'matchImages': list(self.match_images),
            'defaultCacheDuration': (
                format_duration(self.default_cache_duration)
                if self.default_cache_duration is not None else None
            ),
            'apiVersion': self.api_version,
            'args': list(self.args),
            'env': [{'name': var.name, 'value': var.value} for var in self.env],
        }
        if self.token_attributes is not None:
            attrs = self.token_attributes
            data['tokenAttributes'] = {
                'serviceAccountTokenAudience': attrs.service_account_token_audience,
                'requireServiceAccount': attrs.require_service_account,
                'requiredServiceAccountAnnotationKeys': list(attrs.required_service_account_annotation_keys),
                'optionalServiceAccountAnnotationKeys': list(attrs.optional_service_account_annotation_keys),
            }
        return data


@dataclass
class CredentialProviderConfig:
    """
    Complete credential provider configuration.

    Built fresh on every load by concatenating the providers of each
    document in file order.
    """
    providers: List[CredentialProvider] = field(default_factory=list)

    @property
    def provider_names(self) -> List[str]:
        return [provider.name for provider in self.providers]

    def get_provider(self, name: str) -> Optional[CredentialProvider]:
        for provider in self.providers:
            if provider.name == name:
                return provider
        return None

    def merge(self, other: "CredentialProviderConfig") -> "CredentialProviderConfig":
        """Return a new configuration with ``other``'s providers appended."""
        return CredentialProviderConfig(providers=self.providers + other.providers)

    def to_dict(self) -> dict:
        """Convert to a complete v1 document that the loader accepts back."""
        return {
            'kind': CREDENTIAL_PROVIDER_CONFIG_KIND,
            'apiVersion': CONFIG_API_VERSION_V1,
            'providers': [provider.to_dict() for provider in self.providers],
        }
