from __future__ import annotations

import pytest

from tests.unit.factories import StubRepo, make_uow


@pytest.fixture()
def repo() -> StubRepo:
    return StubRepo()


@pytest.fixture()
def uow(repo: StubRepo):
    return make_uow(repo)
