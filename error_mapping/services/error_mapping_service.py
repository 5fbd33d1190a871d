"""Error mapping service: classifies provider errors into failures.

Rules are loaded once (from JSON) and scanned in order for every request.
The first rule whose code regex, description regex and state all match
decides the outcome:
- a reserved mapping raises an undefined, unavailable or unexpected result
- any other mapping becomes a ``Failure`` with a formatted reason

When no rule matches, an unexpected result is raised with a header-safe
reason built from the code and description.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from pydantic import TypeAdapter, ValidationError

from error_mapping.core.config import (
    DEFAULT_REASON_PATTERN,
    Settings,
    check_reason_pattern,
    get_settings,
)
from error_mapping.core.errors import (
    ConfigErrorKind,
    ErrorDefinition,
    ErrorMappingConfigError,
    ErrorSource,
    ErrorType,
    InvalidInputError,
    UnavailableResultError,
    UndefinedResultError,
    UnexpectedResultError,
)
from error_mapping.core.logging import LoggerMixin, get_logger
from error_mapping.core.security.header_safe import make_header_safe
from error_mapping.domain.models.failure import Failure, to_general
from error_mapping.schemas.rule import ErrorRule, MappingKind

logger = get_logger(__name__)

NULL_LITERAL = "null"

_RULES_ADAPTER = TypeAdapter(list[ErrorRule])


def _nullable(value: str | None) -> str:
    return NULL_LITERAL if value is None else value


def _full_match(pattern: str, value: str) -> bool:
    try:
        return re.fullmatch(pattern, value) is not None
    except re.error as exc:
        raise ErrorMappingConfigError(
            "Rule contains an invalid regex",
            kind=ConfigErrorKind.PATTERN,
            details={"pattern": pattern, "error": str(exc)},
        ) from exc


def _match_nullable(value: str | None, pattern: str | None) -> bool:
    if pattern is None:
        return True
    return _full_match(pattern, value or "")


def _equals_nullable(left: str | None, right: str | None) -> bool:
    # Absence on either side counts as a match.
    if left is None or right is None:
        return True
    return left == right


def unexpected_result(
    code: str | None,
    description: str | None,
    state: str | None = None,
    rule: ErrorRule | None = None,
) -> UnexpectedResultError:
    """Build the unexpected-result signal for an unclassifiable provider error.

    ``state`` appears in the message only; the reason is restricted to the
    header-safe code and description.
    """
    message = (
        f"Unexpected result, code = {_nullable(code)}, "
        f"description = {_nullable(description)}, state = {_nullable(state)}"
    )
    reason = (
        f"code = {_nullable(make_header_safe(code))}, "
        f"description = {_nullable(make_header_safe(description))}"
    )
    definition = ErrorDefinition(
        source=ErrorSource.INTERNAL,
        error_type=ErrorType.UNEXPECTED_ERROR,
        error_reason=reason,
    )
    return UnexpectedResultError(
        message,
        code,
        description,
        error_definition=definition,
        state=state,
        rule=rule,
    )


class ErrorMapping(LoggerMixin):
    """Maps provider error codes onto failures using an ordered rule set.

    Attributes:
        reason_pattern: Format applied to ``(code, description)`` to build
            ``Failure.reason``. Defaults to ``"'%s' - '%s'"``.
        rules: Immutable, ordered rules; the first match wins.
    """

    def __init__(
        self,
        reason_pattern: str = DEFAULT_REASON_PATTERN,
        rules: Iterable[ErrorRule] = (),
    ):
        try:
            check_reason_pattern(reason_pattern)
        except ValueError as exc:
            raise ErrorMappingConfigError(
                str(exc),
                kind=ConfigErrorKind.PATTERN,
                details={"reason_pattern": reason_pattern},
            ) from exc
        self.reason_pattern = reason_pattern
        self.rules: tuple[ErrorRule, ...] = tuple(rules)

    @classmethod
    def from_json(
        cls,
        raw: str | bytes,
        reason_pattern: str = DEFAULT_REASON_PATTERN,
    ) -> ErrorMapping:
        """Build a mapping from a JSON array of rule objects."""
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Failed to parse error mapping rules", error=str(exc))
            raise ErrorMappingConfigError(
                "Json can't parse data from rules source",
                kind=ConfigErrorKind.PARSE,
                details={"error": str(exc)},
            ) from exc

        try:
            rules = _RULES_ADAPTER.validate_python(data)
        except ValidationError as exc:
            logger.error("Failed to map error mapping rules", errors=exc.error_count())
            raise ErrorMappingConfigError(
                "Json can't map data from rules source",
                kind=ConfigErrorKind.MAPPING,
                details={"errors": exc.errors(include_url=False)},
            ) from exc

        logger.info("Loaded error mapping rules", rule_count=len(rules))
        return cls(reason_pattern, rules)

    @classmethod
    def from_stream(
        cls,
        stream: IO[str] | IO[bytes],
        reason_pattern: str = DEFAULT_REASON_PATTERN,
    ) -> ErrorMapping:
        """Build a mapping from a readable text or binary stream."""
        try:
            raw = stream.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read error mapping rules", error=str(exc))
            raise ErrorMappingConfigError(
                "Failed to read rules source",
                kind=ConfigErrorKind.IO,
                details={"error": str(exc)},
            ) from exc
        return cls.from_json(raw, reason_pattern)

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        reason_pattern: str = DEFAULT_REASON_PATTERN,
        encoding: str = "utf-8",
    ) -> ErrorMapping:
        """Build a mapping from a JSON rules file."""
        try:
            raw = Path(path).read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read error mapping rules", path=str(path), error=str(exc))
            raise ErrorMappingConfigError(
                "Failed to read rules file",
                kind=ConfigErrorKind.IO,
                details={"path": str(path), "error": str(exc)},
            ) from exc
        return cls.from_json(raw, reason_pattern)

    def classify(
        self,
        code: str | None,
        description: str | None = None,
        state: str | None = None,
    ) -> Failure:
        """Classify a provider error.

        Returns:
            Failure with ``reason`` set from the reason pattern.

        Raises:
            InvalidInputError: ``code`` is absent.
            UndefinedResultError: matched rule maps to ``ResultUnknown``.
            UnavailableResultError: matched rule maps to ``ResourceUnavailable``.
            UnexpectedResultError: no rule matched, or the rule maps to ``ResultUnexpected``.
        """
        rule = self.find_rule(code, description, state)
        log = self.logger.bind(code=code, state=state)
        if rule is None:
            log.warning("No error mapping rule matched", description=description)
            raise unexpected_result(code, description, state)

        target = rule.target
        if target.kind is MappingKind.UNDEFINED:
            log.info("Provider result undefined", mapping=rule.mapping)
            raise UndefinedResultError(
                f"Undefined result {rule!r}, code = {code}, description = {_nullable(description)}",
                code,
                description,
                rule=rule,
            )
        if target.kind is MappingKind.UNAVAILABLE:
            log.info("Provider result unavailable", mapping=rule.mapping)
            raise UnavailableResultError(
                f"Unavailable result {rule!r}, code = {code}, description = {_nullable(description)}",
                code,
                description,
                rule=rule,
            )
        if target.kind is MappingKind.UNEXPECTED:
            log.warning("Provider result mapped as unexpected", mapping=rule.mapping)
            raise unexpected_result(code, description, rule=rule)

        failure = to_general(target.key)
        failure.reason = self.prepare_reason(code, description)
        return failure

    map_failure = classify

    def find_rule(
        self,
        code: str | None,
        description: str | None = None,
        state: str | None = None,
    ) -> ErrorRule | None:
        """Return the first rule matching the request, if any."""
        if code is None:
            raise InvalidInputError("Code must be set", details={"description": description})

        for rule in self.rules:
            if self._matches(rule, code, description, state):
                return rule
        return None

    def prepare_reason(self, code: str, description: str | None) -> str:
        """Render the failure reason for ``code`` and ``description``."""
        return self.reason_pattern % (code, _nullable(description))

    @staticmethod
    def _matches(rule: ErrorRule, code: str, description: str | None, state: str | None) -> bool:
        return (
            _full_match(rule.code_regex, code)
            and _match_nullable(description, rule.description_regex)
            and _equals_nullable(state, rule.state)
        )


def create_error_mapping(settings: Settings | None = None) -> ErrorMapping:
    """Factory function to build the error mapping from settings."""
    settings = settings or get_settings()
    if not settings.mapping.rules_path:
        logger.error("Error mapping rules path is not configured")
        raise ErrorMappingConfigError(
            "ERROR_MAPPING_RULES_PATH is not set",
            kind=ConfigErrorKind.IO,
        )
    return ErrorMapping.from_path(
        settings.mapping.rules_path,
        reason_pattern=settings.mapping.reason_pattern,
        encoding=settings.mapping.encoding,
    )
