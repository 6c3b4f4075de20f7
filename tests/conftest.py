"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from tests.fakes import make_league_data


@pytest.fixture
def league_data() -> dict[str, Any]:
    return make_league_data()
