"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
FIXTURES = Path(__file__).resolve().parent / "fixtures"

# Add package to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from error_mapping.schemas.rule import ErrorRule  # noqa: E402
from error_mapping.services.error_mapping_service import ErrorMapping  # noqa: E402

REASON_PATTERN = "'%s' - '%s'"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding JSON rule fixtures."""
    return FIXTURES


@pytest.fixture
def merchant_id_rule() -> ErrorRule:
    return ErrorRule(
        code_regex="00001",
        description_regex="Invalid Merchant ID",
        mapping="authorization_failed:unknown",
    )


@pytest.fixture
def merchant_name_rule() -> ErrorRule:
    return ErrorRule(
        code_regex="00002",
        description_regex="Invalid Merchant Name",
        mapping="authorization_failed:provider_malfunction",
    )


@pytest.fixture
def insufficient_funds_rule() -> ErrorRule:
    return ErrorRule(code_regex="00001", mapping="authorization_failed:insufficient_funds")


@pytest.fixture
def error_mapping(
    merchant_id_rule: ErrorRule,
    merchant_name_rule: ErrorRule,
    insufficient_funds_rule: ErrorRule,
) -> ErrorMapping:
    """Mapping with a description-constrained rule ahead of a code-only fallback."""
    return ErrorMapping(
        REASON_PATTERN,
        [merchant_id_rule, merchant_name_rule, insufficient_funds_rule],
    )


@pytest.fixture
def file_error_mapping(fixtures_dir: Path) -> ErrorMapping:
    """Mapping loaded from the sample rules file."""
    return ErrorMapping.from_path(fixtures_dir / "errors.json", REASON_PATTERN)
