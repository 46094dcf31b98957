"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from binary_boxer.sim.content.registry import CatalogueRegistry


@pytest.fixture(scope="module")
def registry() -> CatalogueRegistry:
    """Module-scoped registry with the bundled catalogue loaded once."""
    return CatalogueRegistry().load_all()
