"""Pytest configuration and fixtures."""

import pytest

from playground_importer.domain.entities import Identity
from playground_importer.domain.value_objects import RepositoryReference
from playground_importer.infrastructure.memory_store import InMemoryPlaygroundStore


@pytest.fixture
def user() -> Identity:
    return Identity(id="user-1")


@pytest.fixture
def ref() -> RepositoryReference:
    return RepositoryReference.from_url("https://github.com/acme/widgets")


@pytest.fixture
def store() -> InMemoryPlaygroundStore:
    return InMemoryPlaygroundStore()
