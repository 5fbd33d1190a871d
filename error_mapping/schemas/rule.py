"""Rule schemas for provider error mapping configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReservedMapping(str, Enum):
    """Mapping keywords that replace a failure with a result signal."""

    RESULT_UNAVAILABLE = "ResourceUnavailable"
    RESULT_UNDEFINED = "ResultUnknown"
    RESULT_UNEXPECTED = "ResultUnexpected"


class MappingKind(str, Enum):
    UNDEFINED = "UNDEFINED"
    UNAVAILABLE = "UNAVAILABLE"
    UNEXPECTED = "UNEXPECTED"
    FAILURE = "FAILURE"


_RESERVED_KINDS = {
    ReservedMapping.RESULT_UNDEFINED.value: MappingKind.UNDEFINED,
    ReservedMapping.RESULT_UNAVAILABLE.value: MappingKind.UNAVAILABLE,
    ReservedMapping.RESULT_UNEXPECTED.value: MappingKind.UNEXPECTED,
}


@dataclass(frozen=True)
class MappingTarget:
    """Parsed form of a rule's ``mapping`` field."""

    kind: MappingKind
    key: str

    @classmethod
    def parse(cls, mapping: str) -> MappingTarget:
        return cls(kind=_RESERVED_KINDS.get(mapping, MappingKind.FAILURE), key=mapping)

    @property
    def is_reserved(self) -> bool:
        return self.kind is not MappingKind.FAILURE


class ErrorRule(BaseModel):
    """A single provider error mapping rule.

    Rules are matched in order; the first rule whose code, description and
    state constraints all hold decides the classification.
    """

    code_regex: str = Field(..., alias="codeRegex", description="Regex matched against the full code")
    description_regex: str | None = Field(
        default=None,
        alias="descriptionRegex",
        description="Regex matched against the full description; absent matches anything",
    )
    state: str | None = Field(default=None, description="Exact provider state; absent matches anything")
    mapping: str = Field(..., description="Reserved keyword or colon-separated failure code")

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @property
    def target(self) -> MappingTarget:
        return MappingTarget.parse(self.mapping)
