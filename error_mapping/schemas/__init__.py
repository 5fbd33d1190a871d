"""Schemas package for error mapping configuration models."""

from error_mapping.schemas.rule import (
    ErrorRule,
    MappingKind,
    MappingTarget,
    ReservedMapping,
)

__all__ = [
    "ErrorRule",
    "MappingKind",
    "MappingTarget",
    "ReservedMapping",
]
