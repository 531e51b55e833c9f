"""
Credential provider configuration validation.

Validation is a fixed pipeline over the whole merged configuration. It never
stops at the first failure: every error of every provider is collected, in
provider order, with the cross-provider duplicate-name pass last.
"""

from datetime import timedelta

from credprovider.config.core.validator import ConfigValidator, ErrorList, FieldPath
from credprovider.outils.image_match import parse_schemeless_url
from credprovider.outils.qualified_name import is_qualified_name
from credprovider.outils.string_set import find_duplicates, sorted_intersection
from .config import (
    SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE, SUPPORTED_PROVIDER_API_VERSIONS,
    TOKEN_ATTRIBUTES_API_VERSION, CredentialProvider, CredentialProviderConfig,
    ServiceAccountTokenAttributes
)


class CredentialProviderConfigValidator(ConfigValidator):
    """
    Validator for merged credential provider configurations.

    Parameters
    ----------
    sa_token_for_credential_providers : bool
        Whether the service account token feature gate is enabled; when it is
        not, any ``tokenAttributes`` is forbidden.
    """

    def __init__(self, sa_token_for_credential_providers: bool = False):
        super().__init__("credential")
        self.sa_token_for_credential_providers = sa_token_for_credential_providers

    def validate(self, config: CredentialProviderConfig) -> ErrorList:
        errs = ErrorList()
        providers_path = FieldPath("providers")

        if not config.providers:
            errs.required(providers_path, "at least 1 item in plugins is required")

        for i, provider in enumerate(config.providers):
            self._validate_provider(provider, providers_path.index(i), errs)

        self._validate_unique_names(config, providers_path, errs)

        if errs:
            self.logger.debug("Credential provider config is invalid", errors=len(errs))
        return errs

    # ===== PER PROVIDER =====

    def _validate_provider(self, provider: CredentialProvider, path: FieldPath, errs: ErrorList):
        if not provider.match_images:
            errs.required(path.child("matchImages"), "at least 1 item in matchImages is required")

        for image in provider.match_images:
            try:
                parse_schemeless_url(image)
            except ValueError as e:
                errs.invalid(path.child("matchImages"), image, f"match image is invalid: {e}")

        self._validate_cache_duration(provider.default_cache_duration, path.child("defaultCacheDuration"), errs)

        if not provider.api_version:
            errs.required(path.child("apiVersion"))
        elif provider.api_version not in SUPPORTED_PROVIDER_API_VERSIONS:
            errs.not_supported(path.child("apiVersion"), provider.api_version, list(SUPPORTED_PROVIDER_API_VERSIONS))

        self._validate_name(provider.name, path.child("name"), errs)

        if provider.token_attributes is not None:
            self._validate_token_attributes(provider, path.child("tokenAttributes"), errs)

    @staticmethod
    def _validate_cache_duration(duration: timedelta, path: FieldPath, errs: ErrorList):
        if duration is None:
            errs.required(path)
        elif duration < timedelta(0):
            errs.invalid(path, duration, "must be greater than or equal to 0")

    @staticmethod
    def _validate_name(name: str, path: FieldPath, errs: ErrorList):
        # The name becomes part of the plugin executable's path
        if not name:
            errs.required(path)
            return
        if "/" in name:
            errs.invalid(path, name, "provider name cannot contain '/'")
        if name == ".":
            errs.invalid(path, name, "provider name cannot be '.'")
        if name == "..":
            errs.invalid(path, name, "provider name cannot be '..'")
        if " " in name:
            errs.invalid(path, name, "provider name cannot contain spaces")

    def _validate_token_attributes(self, provider: CredentialProvider, path: FieldPath, errs: ErrorList):
        if not self.sa_token_for_credential_providers:
            errs.forbidden(
                path,
                f"tokenAttributes is not supported when {SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE} feature gate is disabled",
            )
            return
        if provider.api_version != TOKEN_ATTRIBUTES_API_VERSION:
            errs.forbidden(path, f"tokenAttributes is only supported for {TOKEN_ATTRIBUTES_API_VERSION} API version")
            return

        attrs: ServiceAccountTokenAttributes = provider.token_attributes
        required_path = path.child("requiredServiceAccountAnnotationKeys")
        optional_path = path.child("optionalServiceAccountAnnotationKeys")

        if not attrs.service_account_token_audience:
            errs.required(path.child("serviceAccountTokenAudience"))
        if attrs.require_service_account is None:
            errs.required(path.child("requireServiceAccount"))
        elif not attrs.require_service_account and attrs.required_service_account_annotation_keys:
            errs.forbidden(
                required_path,
                "requireServiceAccount cannot be false when requiredServiceAccountAnnotationKeys is set",
            )

        self._validate_annotation_keys(attrs.required_service_account_annotation_keys, required_path, errs)
        self._validate_annotation_keys(attrs.optional_service_account_annotation_keys, optional_path, errs)

        both = sorted_intersection(
            attrs.required_service_account_annotation_keys,
            attrs.optional_service_account_annotation_keys,
        )
        if both:
            errs.invalid(path, both, "annotation keys cannot be both required and optional")

    @staticmethod
    def _validate_annotation_keys(keys, path: FieldPath, errs: ErrorList):
        for key in keys:
            for msg in is_qualified_name(key):
                errs.invalid(path, key, msg)
        for key in find_duplicates(keys):
            errs.duplicate(path, key)

    # ===== ACROSS PROVIDERS =====

    @staticmethod
    def _validate_unique_names(config: CredentialProviderConfig, path: FieldPath, errs: ErrorList):
        seen = set()
        reported = set()
        for i, provider in enumerate(config.providers):
            name = provider.name
            if name in seen and name not in reported:
                errs.duplicate(path.index(i).child("name"), name)
                reported.add(name)
            seen.add(name)


def validate_credential_provider_config(
    config: CredentialProviderConfig, sa_token_for_credential_providers: bool = False
) -> ErrorList:
    """
    Validate a merged credential provider configuration.

    Parameters
    ----------
    config : CredentialProviderConfig
        The merged configuration; it is not modified
    sa_token_for_credential_providers : bool
        State of the service account token feature gate

    Returns
    -------
    ErrorList
        Every field error found, in discovery order; empty when valid
    """
    return CredentialProviderConfigValidator(sa_token_for_credential_providers).validate(config)
