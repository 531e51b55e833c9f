"""
Configuration registry holding the active credential provider configuration.

A configuration becomes active only after it has been loaded and validated
in full. A failed load or reload leaves the previously active configuration
in place.
"""

import copy
import threading
from pathlib import Path
from typing import List, Optional, Union

from credprovider.config.credential.config import CredentialProvider, CredentialProviderConfig
from credprovider.config.credential.loader import read_credential_provider_config
from credprovider.config.credential.validation import validate_credential_provider_config
from credprovider.core.exceptions import ConfigurationError, ProviderNotFoundError
from credprovider.logger import get_credprovider_logger


class ConfigRegistry:
    """
    Central registry for the active credential provider configuration.

    Parameters
    ----------
    sa_token_for_credential_providers : bool
        State of the service account token feature gate, passed to every
        validation run.
    """

    def __init__(self, sa_token_for_credential_providers: bool = False):
        self.sa_token_for_credential_providers = sa_token_for_credential_providers
        self.logger = get_credprovider_logger("credprovider.config.registry")
        self._lock = threading.RLock()

        self._config: Optional[CredentialProviderConfig] = None
        self._path: Optional[Path] = None

    @property
    def config(self) -> Optional[CredentialProviderConfig]:
        """A copy of the active configuration, or None before the first load."""
        with self._lock:
            return copy.deepcopy(self._config)

    @property
    def path(self) -> Optional[Path]:
        with self._lock:
            return self._path

    def load(self, path: Union[str, Path]) -> CredentialProviderConfig:
        """
        Load, validate and activate the configuration at ``path``.

        Args:
            path: Configuration file or directory

        Returns:
            The newly active configuration

        Raises:
            ConfigLoadError: If the documents cannot be read or decoded
            AggregateValidationError: If the merged configuration is invalid
        """
        path = Path(path)
        log = self.logger.bind(path=str(path))
        config = read_credential_provider_config(path)

        errs = validate_credential_provider_config(config, self.sa_token_for_credential_providers)
        aggregate = errs.to_aggregate()
        if aggregate is not None:
            log.error(
                "Credential provider config validation failed",
                errors=[e.message for e in errs],
            )
            raise aggregate

        with self._lock:
            self._config = config
            self._path = path

        log.info(
            "Credential provider config activated",
            providers=config.provider_names,
        )
        return copy.deepcopy(config)

    def reload(self) -> CredentialProviderConfig:
        """Re-read the path of the last successful load and activate it if valid."""
        with self._lock:
            path = self._path
        if path is None:
            raise ConfigurationError(reason="no credential provider config has been loaded yet")
        return self.load(path)

    def get_provider(self, name: str) -> CredentialProvider:
        """
        Get an active provider by name.

        Raises:
            ProviderNotFoundError: If no active provider has that name
        """
        with self._lock:
            provider = self._config.get_provider(name) if self._config else None
            if provider is None:
                raise ProviderNotFoundError(name)
            return copy.deepcopy(provider)

    def list_providers(self) -> List[str]:
        """List the names of all active providers."""
        with self._lock:
            return self._config.provider_names if self._config else []

    def reset(self):
        """Drop the active configuration."""
        with self._lock:
            self._config = None
            self._path = None
            self.logger.info("Registry reset completed")
