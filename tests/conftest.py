"""
Shared pytest fixtures for reconciler tests.

Provides reusable fixtures for:
- A mutable record type with identity, name (secondary key) and remark
- The old/new collections of the reference fake-add scenario
- Configuration objects

Records are plain dataclasses so tests can assert on identity mutation
and object identity directly.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from validation.config import ReconcileConfig


@dataclass(eq=False)
class Item:
    """Minimal persisted entity: surrogate id, business-unique name, free text."""
    id: Optional[int] = None
    name: Optional[str] = None
    remark: Optional[str] = None


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def make_item():
    """
    Factory for Item records.

    Usage:
        def test_x(make_item):
            item = make_item(id=7, name="abc")
    """
    return Item


@pytest.fixture
def old_items():
    """
    Stored records: ids 1, 2, 3 with names "123", "789", "456".

    Usage:
        def test_x(old_items):
            assert [i.id for i in old_items] == [1, 2, 3]
    """
    return [
        Item(id=1, name="123"),
        Item(id=2, name="789", remark="123"),
        Item(id=3, name="456"),
    ]


@pytest.fixture
def new_items(old_items):
    """
    Edited records for the reference scenario.

    Provides, in order:
        - the very same object as old id 1 (unchanged)
        - a re-entered "789" record with no id and remark "432"
        - id 3 with name "456"
        - a genuinely new "4567" record with no id
    """
    return [
        old_items[0],
        Item(name="789", remark="432"),
        Item(id=3, name="456"),
        Item(name="4567"),
    ]


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def strict_config():
    """ReconcileConfig that raises on duplicate keys."""
    return ReconcileConfig(strict_keys=True)


@pytest.fixture
def valid_config_dict():
    """
    Dictionary with valid configuration values for ReconcileConfig.

    Usage:
        def test_config_parsing(valid_config_dict):
            config = ReconcileConfig(**valid_config_dict)
    """
    return {
        "strict_keys": False,
        "warn_on_duplicates": True,
        "log_reclassified": True,
        "log_level": "debug",
    }
