"""
Domain-specific exceptions for provider error mapping.

Classification outcomes other than a normal ``Failure`` are raised as one
of these exceptions. Each carries a status hint callers may use when they
surface the outcome over a transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from error_mapping.schemas.rule import ErrorRule


class ErrorMappingError(Exception):
    """Base exception for all error mapping domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(ErrorMappingError):
    """
    Raised when a classification request is malformed.

    Examples:
    - Provider error code missing

    HTTP Status: 400 Bad Request
    """

    pass


class FailureMappingError(ErrorMappingError):
    """
    Raised when a mapping key cannot be turned into a failure.

    Examples:
    - Empty mapping key
    - Empty segment, as in ``authorization_failed::unknown``
    """

    pass


class ConfigErrorKind(str, Enum):
    PARSE = "parse"
    MAPPING = "mapping"
    IO = "io"
    PATTERN = "pattern"


class ErrorMappingConfigError(ErrorMappingError):
    """
    Raised when the rule set cannot be loaded or used.

    Examples:
    - Rules file is not valid JSON (PARSE)
    - Rules JSON is not a list of rule objects (MAPPING)
    - Rules file missing or unreadable (IO)
    - Rule carries a regex that does not compile (PATTERN)
    """

    def __init__(
        self,
        message: str,
        kind: ConfigErrorKind,
        details: dict[str, Any] | None = None,
    ):
        self.kind = kind
        super().__init__(message, details={"kind": kind.value, **(details or {})})


class ErrorSource(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"


class ErrorType(str, Enum):
    UNEXPECTED_ERROR = "unexpected_error"
    UNAVAILABLE_RESULT = "unavailable_result"
    UNDEFINED_RESULT = "undefined_result"


@dataclass(frozen=True)
class ErrorDefinition:
    """Transport-facing descriptor attached to an unexpected result."""

    source: ErrorSource
    error_type: ErrorType
    error_reason: str


class ProviderResultError(ErrorMappingError):
    """Base for outcomes that replace a failure with a result signal."""

    def __init__(
        self,
        message: str,
        code: str | None,
        description: str | None,
        rule: ErrorRule | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.description = description
        self.rule = rule
        context: dict[str, Any] = {"code": code, "description": description}
        if rule is not None:
            context["rule"] = rule.model_dump(by_alias=True)
        super().__init__(message, details={**context, **(details or {})})


class UndefinedResultError(ProviderResultError):
    """
    Raised when the matched rule marks the provider result as not yet known.

    The caller should treat the provider response as inconclusive and poll again.

    HTTP Status: 504 Gateway Timeout
    """

    pass


class UnavailableResultError(ProviderResultError):
    """
    Raised when the matched rule marks the provider as unavailable.

    The caller may retry later.

    HTTP Status: 503 Service Unavailable
    """

    pass


class UnexpectedResultError(ProviderResultError):
    """
    Raised when a provider error cannot be classified.

    Either no rule matched, or the matched rule explicitly marks the case
    as unexpected. ``error_definition.error_reason`` is always ASCII-safe.

    HTTP Status: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str,
        code: str | None,
        description: str | None,
        error_definition: ErrorDefinition,
        state: str | None = None,
        rule: ErrorRule | None = None,
    ):
        self.state = state
        self.error_definition = error_definition
        super().__init__(
            message,
            code,
            description,
            rule=rule,
            details={"state": state, "error_reason": error_definition.error_reason},
        )


ERROR_STATUS_MAP = {
    InvalidInputError: 400,
    UndefinedResultError: 504,
    UnavailableResultError: 503,
    UnexpectedResultError: 500,
    FailureMappingError: 500,
    ErrorMappingConfigError: 500,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)
