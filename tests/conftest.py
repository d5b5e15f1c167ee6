"""Shared fixtures."""

import pytest
from factories import repository_payload

from issuedesk.models import Repository


@pytest.fixture
def repository() -> Repository:
    return Repository.from_api(repository_payload())
