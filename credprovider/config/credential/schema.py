"""
Credential provider configuration schemas.

Each supported envelope version is its own schema class declaring the fields
it knows. Decoding a document runs two explicit steps:

1. a strict pass that diffs the document's fields against the schema and
   rejects every unknown one;
2. a conversion into the version-neutral classes in ``config.py``.

Only the ``v1`` envelope knows ``tokenAttributes``; older envelopes reject
it as an unknown field.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from credprovider.core.exceptions import (
    ConfigDecodeError, ConfigSyntaxError, SchemaNotRegisteredError, StrictDecodingError
)
from credprovider.outils.time_parser import parse_duration
from .config import (
    CONFIG_API_VERSION_V1, CONFIG_API_VERSION_V1ALPHA1, CONFIG_API_VERSION_V1BETA1,
    CREDENTIAL_PROVIDER_CONFIG_KIND, CredentialProvider, CredentialProviderConfig,
    ExecEnvVar, ServiceAccountTokenAttributes
)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


class CredentialProviderConfigSchema:
    """
    Base schema shared by every envelope version.

    Subclasses set ``api_version`` and extend the field sets they accept.
    """

    api_version: str = ""
    kind: str = CREDENTIAL_PROVIDER_CONFIG_KIND

    envelope_fields = frozenset({'kind', 'apiVersion', 'providers'})
    provider_fields = frozenset({'name', 'matchImages', 'defaultCacheDuration', 'apiVersion', 'args', 'env'})
    env_fields = frozenset({'name', 'value'})
    token_attributes_fields = frozenset()

    def decode(self, document: Mapping[str, Any], source: Optional[str] = None) -> CredentialProviderConfig:
        """Strictly decode ``document`` into the version-neutral configuration."""
        unknown = self.unknown_fields(document)
        if unknown:
            raise StrictDecodingError(source, unknown)
        return self.convert(document, source)

    # ===== STRICT PASS =====

    def unknown_fields(self, document: Mapping[str, Any]) -> List[str]:
        """Return the path of every field the schema does not declare, in document order."""
        unknown: List[str] = []
        self._diff(document, self.envelope_fields, "", unknown)

        providers = document.get('providers')
        if not isinstance(providers, list):
            return unknown

        for i, provider in enumerate(providers):
            if not isinstance(provider, Mapping):
                continue
            path = f"providers[{i}]"
            self._diff(provider, self.provider_fields, path, unknown)

            env = provider.get('env')
            if isinstance(env, list):
                for j, var in enumerate(env):
                    if isinstance(var, Mapping):
                        self._diff(var, self.env_fields, f"{path}.env[{j}]", unknown)

            attrs = provider.get('tokenAttributes')
            if 'tokenAttributes' in self.provider_fields and isinstance(attrs, Mapping):
                self._diff(attrs, self.token_attributes_fields, f"{path}.tokenAttributes", unknown)

        return unknown

    @staticmethod
    def _diff(payload: Mapping[str, Any], allowed: frozenset, path: str, unknown: List[str]):
        for key in payload:
            if key not in allowed:
                unknown.append(_join(path, str(key)))

    # ===== CONVERSION =====

    def convert(self, document: Mapping[str, Any], source: Optional[str] = None) -> CredentialProviderConfig:
        providers = document.get('providers')
        if providers is None:
            return CredentialProviderConfig()
        if not isinstance(providers, list):
            raise ConfigDecodeError(source, "providers", f"expected a list, got {type(providers).__name__}")

        return CredentialProviderConfig(providers=[
            self.convert_provider(provider, f"providers[{i}]", source)
            for i, provider in enumerate(providers)
        ])

    def convert_provider(self, payload: Any, path: str, source: Optional[str]) -> CredentialProvider:
        if not isinstance(payload, Mapping):
            raise ConfigDecodeError(source, path, f"expected a mapping, got {type(payload).__name__}")

        duration = payload.get('defaultCacheDuration')
        if duration is not None:
            if not isinstance(duration, str):
                raise ConfigDecodeError(
                    source, _join(path, 'defaultCacheDuration'),
                    f"expected a duration string, got {type(duration).__name__}"
                )
            try:
                duration = parse_duration(duration)
            except ValueError as e:
                raise ConfigDecodeError(source, _join(path, 'defaultCacheDuration'), str(e)) from e

        return CredentialProvider(
            name=_string(payload, 'name', path, source),
            match_images=_string_list(payload, 'matchImages', path, source),
            default_cache_duration=duration,
            api_version=_string(payload, 'apiVersion', path, source),
            args=_string_list(payload, 'args', path, source),
            env=self.convert_env(payload.get('env'), _join(path, 'env'), source),
            token_attributes=self.convert_token_attributes(payload, path, source),
        )

    def convert_env(self, payload: Any, path: str, source: Optional[str]) -> List[ExecEnvVar]:
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ConfigDecodeError(source, path, f"expected a list, got {type(payload).__name__}")

        env = []
        for i, var in enumerate(payload):
            var_path = f"{path}[{i}]"
            if not isinstance(var, Mapping):
                raise ConfigDecodeError(source, var_path, f"expected a mapping, got {type(var).__name__}")
            env.append(ExecEnvVar(
                name=_string(var, 'name', var_path, source),
                value=_string(var, 'value', var_path, source),
            ))
        return env

    def convert_token_attributes(
        self, payload: Mapping[str, Any], path: str, source: Optional[str]
    ) -> Optional[ServiceAccountTokenAttributes]:
        # Older envelopes never reach here with tokenAttributes set; the strict pass rejects it
        return None


class CredentialProviderConfigV1Alpha1(CredentialProviderConfigSchema):
    api_version = CONFIG_API_VERSION_V1ALPHA1


class CredentialProviderConfigV1Beta1(CredentialProviderConfigSchema):
    api_version = CONFIG_API_VERSION_V1BETA1


class CredentialProviderConfigV1(CredentialProviderConfigSchema):
    """The newest envelope; adds per-provider ``tokenAttributes``."""

    api_version = CONFIG_API_VERSION_V1

    provider_fields = CredentialProviderConfigSchema.provider_fields | {'tokenAttributes'}
    token_attributes_fields = frozenset({
        'serviceAccountTokenAudience',
        'requireServiceAccount',
        'requiredServiceAccountAnnotationKeys',
        'optionalServiceAccountAnnotationKeys',
    })

    def convert_token_attributes(
        self, payload: Mapping[str, Any], path: str, source: Optional[str]
    ) -> Optional[ServiceAccountTokenAttributes]:
        attrs = payload.get('tokenAttributes')
        if attrs is None:
            return None
        path = _join(path, 'tokenAttributes')
        if not isinstance(attrs, Mapping):
            raise ConfigDecodeError(source, path, f"expected a mapping, got {type(attrs).__name__}")

        require = attrs.get('requireServiceAccount')
        if require is not None and not isinstance(require, bool):
            raise ConfigDecodeError(
                source, _join(path, 'requireServiceAccount'),
                f"expected a boolean, got {type(require).__name__}"
            )

        return ServiceAccountTokenAttributes(
            service_account_token_audience=_string(attrs, 'serviceAccountTokenAudience', path, source),
            require_service_account=require,
            required_service_account_annotation_keys=_string_list(
                attrs, 'requiredServiceAccountAnnotationKeys', path, source
            ),
            optional_service_account_annotation_keys=_string_list(
                attrs, 'optionalServiceAccountAnnotationKeys', path, source
            ),
        )


def _string(payload: Mapping[str, Any], key: str, path: str, source: Optional[str]) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigDecodeError(source, _join(path, key), f"expected a string, got {type(value).__name__}")
    return value


def _string_list(payload: Mapping[str, Any], key: str, path: str, source: Optional[str]) -> List[str]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigDecodeError(source, _join(path, key), f"expected a list, got {type(value).__name__}")
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigDecodeError(
                source, f"{_join(path, key)}[{i}]", f"expected a string, got {type(item).__name__}"
            )
    return list(value)


# Registered schemas keyed by (apiVersion, kind)
SCHEMAS: Dict[Tuple[str, str], CredentialProviderConfigSchema] = {
    (schema.api_version, schema.kind): schema
    for schema in (
        CredentialProviderConfigV1Alpha1(),
        CredentialProviderConfigV1Beta1(),
        CredentialProviderConfigV1(),
    )
}


def list_supported_config_versions() -> List[str]:
    """Return the envelope apiVersions that have a registered schema, sorted."""
    return sorted(api_version for api_version, _ in SCHEMAS)


def get_schema(api_version: str, kind: str, source: Optional[str] = None) -> CredentialProviderConfigSchema:
    """
    Look up the schema registered for a kind/apiVersion pair.

    Raises
    ------
    SchemaNotRegisteredError
        If no schema is registered for the pair.
    """
    schema = SCHEMAS.get((api_version, kind))
    if schema is None:
        raise SchemaNotRegisteredError(source, kind, api_version)
    return schema


def decode_document(document: Any, source: Optional[str] = None) -> CredentialProviderConfig:
    """
    Dispatch a parsed document on its ``kind`` and ``apiVersion`` and decode it.

    Parameters
    ----------
    document : Any
        The parsed YAML or JSON document
    source : str, optional
        File the document came from, used in error messages

    Returns
    -------
    CredentialProviderConfig
        The version-neutral configuration held by the document
    """
    if not isinstance(document, Mapping):
        raise ConfigSyntaxError(source, f"expected a mapping at the document root, got {type(document).__name__}")

    kind = document.get('kind')
    api_version = document.get('apiVersion')
    if not isinstance(kind, str) or not kind:
        raise SchemaNotRegisteredError(source, kind, api_version, reason="Object 'Kind' is missing")
    if not isinstance(api_version, str) or not api_version:
        raise SchemaNotRegisteredError(source, kind, api_version, reason="Object 'apiVersion' is missing")

    return get_schema(api_version, kind, source).decode(document, source)
