"""Shared fixtures for the test suites."""

import pytest

from ledger.models import BinMapping, User
from ledger.testing import make_bin_mappings, make_user
from rules.context import ReferenceData, ValidationContext


@pytest.fixture
def users() -> list[User]:
    return [
        make_user("1", country="EE"),
        make_user("2", country="DE"),
        make_user("3", country="FI"),
        make_user("4", country="EE", frozen=True),
    ]


@pytest.fixture
def bin_mappings() -> list[BinMapping]:
    return make_bin_mappings()


@pytest.fixture
def context(users, bin_mappings) -> ValidationContext:
    return ValidationContext(reference=ReferenceData.build(users, bin_mappings))
