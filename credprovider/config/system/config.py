"""
System domain configuration classes.

This module defines the settings of the credprovider package itself:
logging and the feature gates that change validation behaviour.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from credprovider.config.credential.config import SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE
from credprovider.core.exceptions import ConfigurationError

ENV_LOG_LEVEL = "CREDPROVIDER_LOG_LEVEL"
ENV_JSON_LOGS = "CREDPROVIDER_JSON_LOGS"
ENV_FEATURE_GATES = "CREDPROVIDER_FEATURE_GATES"

# Gates this package understands, with their default state
KNOWN_FEATURE_GATES: Dict[str, bool] = {
    SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE: False,
}

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(key, str(value), "expected a boolean")


def parse_feature_gates(text: str) -> Dict[str, bool]:
    """
    Parse a ``Name=true,Other=false`` feature gate string.

    Raises:
        ConfigurationError: On an unknown gate name or a non-boolean value
    """
    gates: Dict[str, bool] = {}
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep:
            raise ConfigurationError("feature-gates", item, "missing bool value")
        if name not in KNOWN_FEATURE_GATES:
            raise ConfigurationError("feature-gates", name, "unrecognized feature gate")
        gates[name] = _parse_bool(name, value)
    return gates


@dataclass
class SystemConfig:
    """
    Settings of the credprovider package.

    ``feature_gates`` overrides the defaults in ``KNOWN_FEATURE_GATES``.
    """
    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False
    feature_gates: Dict[str, bool] = field(default_factory=dict)

    def is_enabled(self, gate: str) -> bool:
        if gate not in KNOWN_FEATURE_GATES:
            raise ConfigurationError("feature-gates", gate, "unrecognized feature gate")
        return self.feature_gates.get(gate, KNOWN_FEATURE_GATES[gate])

    @property
    def sa_token_for_credential_providers(self) -> bool:
        return self.is_enabled(SA_TOKEN_FOR_CREDENTIAL_PROVIDERS_GATE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'log_level': self.log_level.value,
            'json_logs': self.json_logs,
            'feature_gates': dict(self.feature_gates),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SystemConfig':
        """Create configuration from dictionary."""
        config = cls()

        if 'log_level' in data:
            try:
                config.log_level = LogLevel(str(data['log_level']).upper())
            except ValueError as e:
                raise ConfigurationError('log_level', str(data['log_level']), "unknown log level") from e

        if 'json_logs' in data:
            config.json_logs = _parse_bool('json_logs', data['json_logs'])

        gates = data.get('feature_gates')
        if isinstance(gates, str):
            config.feature_gates = parse_feature_gates(gates)
        elif gates:
            config.feature_gates = parse_feature_gates(
                ",".join(f"{name}={value}" for name, value in gates.items())
            )

        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SystemConfig':
        """Create configuration from ``CREDPROVIDER_*`` environment variables."""
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        if environ.get(ENV_LOG_LEVEL):
            data['log_level'] = environ[ENV_LOG_LEVEL]
        if environ.get(ENV_JSON_LOGS):
            data['json_logs'] = environ[ENV_JSON_LOGS]
        if environ.get(ENV_FEATURE_GATES):
            data['feature_gates'] = environ[ENV_FEATURE_GATES]
        return cls.from_dict(data)
