from __future__ import annotations

import pytest

from tests._fakes import FakeAxeRunner


@pytest.fixture()
def axe_runner() -> FakeAxeRunner:
    return FakeAxeRunner()
