from __future__ import annotations

from collections.abc import Generator

import pytest

from sqlinline.core.fields import field_registry


@pytest.fixture(autouse=True)
def clean_field_registry() -> Generator[None, None, None]:
    """Drop field registrations made by a test."""
    yield
    field_registry.clear()
