"""Root conftest — shared test configuration and registry fixtures."""

import os

import pytest

# Ensure tests never pick up a developer's contract document or live server
os.environ.setdefault("RS_CONTRACTS_LOG_FORMAT", "text")
os.environ.setdefault("RS_CONTRACTS_CHECK_BASE_URL", "http://contract-test.invalid")

from rs_contracts.core.gedcomx_definitions import (  # noqa: E402
    build_gedcomx_registry, person_definition, search_definition,
)


@pytest.fixture
def gedcomx_registry():
    return build_gedcomx_registry()


@pytest.fixture
def person():
    return person_definition()


@pytest.fixture
def search():
    return search_definition()
