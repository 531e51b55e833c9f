"""
Configuration validation framework.

This module provides the structured field errors, the collector threaded
through a validation walk, and the aggregate error raised when a
configuration cannot be activated.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterator, List, Optional

from credprovider.core.enums import ErrorType
from credprovider.core.exceptions import CredentialProviderError
from credprovider.logger import get_credprovider_logger
from credprovider.outils.time_parser import format_duration


# Sentinel for errors that carry no offending value
OMIT_VALUE = object()


class FieldPath:
    """
    Immutable path to a configuration field, rendered as ``providers[0].name``.
    """

    def __init__(self, *segments: str):
        self._segments = tuple(segments)

    def child(self, name: str) -> "FieldPath":
        return FieldPath(*self._segments, name)

    def index(self, i: int) -> "FieldPath":
        if not self._segments:
            return FieldPath(f"[{i}]")
        return FieldPath(*self._segments[:-1], f"{self._segments[-1]}[{i}]")

    def __str__(self) -> str:
        return ".".join(self._segments)

    def __repr__(self) -> str:
        return f"FieldPath({str(self)!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, (FieldPath, str)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        # Same hash as the rendered string it compares equal to
        return hash(str(self))


def _render_value(value: Any) -> str:
    if isinstance(value, timedelta):
        value = format_duration(value)
    if isinstance(value, (str, list, tuple, bool, int, float)) or value is None:
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""
    type: ErrorType
    field: str
    bad_value: Any = OMIT_VALUE
    detail: str = ""

    @property
    def message(self) -> str:
        text = f"{self.field}: {self.type.value}"
        if self.bad_value is not OMIT_VALUE:
            text += f": {_render_value(self.bad_value)}"
        if self.detail:
            text += f": {self.detail}"
        return text

    def __str__(self) -> str:
        return self.message


class AggregateValidationError(CredentialProviderError):
    """Raised when a configuration fails validation; carries every field error."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = self.errors[0].message
        else:
            message = "[" + ", ".join(e.message for e in self.errors) + "]"
        super().__init__(message)


class ErrorList:
    """
    Ordered collector of field errors.

    Errors keep their discovery order, so the rendered aggregate is
    deterministic for a given input.
    """

    def __init__(self, errors: Optional[List[FieldError]] = None):
        self._errors: List[FieldError] = list(errors or [])

    def required(self, path, detail: str = ""):
        self._errors.append(FieldError(ErrorType.REQUIRED, str(path), detail=detail))

    def invalid(self, path, value: Any, detail: str):
        self._errors.append(FieldError(ErrorType.INVALID, str(path), value, detail))

    def forbidden(self, path, detail: str):
        self._errors.append(FieldError(ErrorType.FORBIDDEN, str(path), detail=detail))

    def duplicate(self, path, value: Any):
        self._errors.append(FieldError(ErrorType.DUPLICATE, str(path), value))

    def not_supported(self, path, value: Any, supported: List[str]):
        detail = ""
        if supported:
            detail = "supported values: " + ", ".join(json.dumps(v) for v in supported)
        self._errors.append(FieldError(ErrorType.UNSUPPORTED, str(path), value, detail))

    def extend(self, other: "ErrorList"):
        self._errors.extend(other)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    def to_aggregate(self) -> Optional[AggregateValidationError]:
        """Return None when empty, otherwise an aggregate carrying every error."""
        if not self._errors:
            return None
        return AggregateValidationError(self._errors)

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __getitem__(self, i: int) -> FieldError:
        return self._errors[i]


class ConfigValidator(ABC):
    """Abstract base class for configuration validators."""

    def __init__(self, domain: str):
        self.domain = domain
        self.logger = get_credprovider_logger(f"credprovider.config.{domain}")

    @abstractmethod
    def validate(self, config) -> ErrorList:
        """Validate configuration data, returning every error found."""
        pass
