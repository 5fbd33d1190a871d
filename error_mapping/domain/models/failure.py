"""Failure models and the mapping-key taxonomy mapper."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from error_mapping.core.errors import FailureMappingError

FAILURE_CODE_SEPARATOR = ":"


class SubFailure(BaseModel):
    """Nested sub-classification of a failure."""

    code: str
    sub: SubFailure | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        fields = [f"code:{self.code}"]
        if self.sub is not None:
            fields.append(f"sub:{self.sub}")
        return f"SubFailure({', '.join(fields)})"


class Failure(BaseModel):
    """Normalized classification of a provider error."""

    code: str
    reason: str | None = None
    sub: SubFailure | None = None

    def to_code(self) -> str:
        """Flatten back into a mapping key, e.g. ``authorization_failed:unknown``."""
        codes = [self.code]
        sub = self.sub
        while sub is not None:
            codes.append(sub.code)
            sub = sub.sub
        return FAILURE_CODE_SEPARATOR.join(codes)

    def __str__(self) -> str:
        fields = [f"code:{self.code}"]
        if self.reason is not None:
            fields.append(f"reason:{self.reason}")
        if self.sub is not None:
            fields.append(f"sub:{self.sub}")
        return f"Failure({', '.join(fields)})"


def to_general(mapping: str) -> Failure:
    """Build a failure from a colon-separated mapping key.

    ``"authorization_failed:insufficient_funds"`` becomes
    ``Failure(code="authorization_failed", sub=SubFailure(code="insufficient_funds"))``.
    """
    codes = mapping.split(FAILURE_CODE_SEPARATOR) if mapping else []
    if not codes or any(not code for code in codes):
        raise FailureMappingError(
            "Mapping key is not a valid failure code",
            details={"mapping": mapping},
        )

    sub: SubFailure | None = None
    for code in reversed(codes[1:]):
        sub = SubFailure(code=code, sub=sub)
    return Failure(code=codes[0], sub=sub)
