from enum import Enum


class ErrorType(Enum):
    """Kinds of field-level validation failures."""
    REQUIRED = "Required value"
    INVALID = "Invalid value"
    FORBIDDEN = "Forbidden"
    DUPLICATE = "Duplicate value"
    UNSUPPORTED = "Unsupported value"
