"""
Credential provider configuration exceptions.

Load errors are fail-fast: the first one aborts the load and no partial
configuration is returned. Validation errors are collected and raised
together as an AggregateValidationError (see config.core.validator).
"""

from typing import List, Optional

from .base import CredentialProviderError, NotFoundError


class ConfigLoadError(CredentialProviderError):
    """Base exception for errors raised while loading configuration files."""

    def __init__(self, path: Optional[str], reason: str):
        self.path = str(path) if path is not None else None
        self.reason = reason
        if self.path:
            message = f"failed to load credential provider config from {self.path!r}: {reason}"
        else:
            message = reason
        super().__init__(message)


class ConfigNotFoundError(ConfigLoadError):
    """The configured path does not exist."""

    def __init__(self, path: str):
        super().__init__(path, "no such file or directory")


class ConfigReadError(ConfigLoadError):
    """A configuration file exists but could not be read."""
    pass


class NoConfigFilesError(ConfigLoadError):
    """A configuration directory holds no file with a supported extension."""

    def __init__(self, path: str):
        super().__init__(path, f"no configuration files found in directory {str(path)!r}")


class ConfigSyntaxError(ConfigLoadError):
    """A document is not well-formed YAML or JSON, or is not a mapping."""
    pass


class SchemaNotRegisteredError(ConfigLoadError):
    """The document's kind/apiVersion pair matches no registered schema."""

    def __init__(self, path: Optional[str], kind: Optional[str], api_version: Optional[str], reason: str = None):
        self.kind = kind
        self.api_version = api_version
        if reason is None:
            reason = f'no kind "{kind}" is registered for version "{api_version}"'
        super().__init__(path, reason)


class StrictDecodingError(ConfigLoadError):
    """A document carries fields its declared schema version does not know, or repeats a field."""

    def __init__(self, path: Optional[str], unknown_fields: List[str] = (), duplicate_fields: List[str] = ()):
        self.unknown_fields = list(unknown_fields)
        self.duplicate_fields = list(duplicate_fields)
        problems = [f'unknown field "{name}"' for name in self.unknown_fields]
        problems += [f'duplicate field "{name}"' for name in self.duplicate_fields]
        super().__init__(path, "strict decoding error: " + ", ".join(problems))


class ConfigDecodeError(ConfigLoadError):
    """A known field holds a value of the wrong type or format."""

    def __init__(self, path: Optional[str], field_path: str, reason: str):
        self.field_path = field_path
        super().__init__(path, f"{field_path}: {reason}")


class ProviderNotFoundError(NotFoundError):
    """No provider with the requested name is configured."""

    def __init__(self, name: str):
        super().__init__("Credential provider", identifier=name)
