"""
Reconciler bound to one entity type.

Wraps the comparison functions with a fixed RecordAccessor and
ReconcileConfig so callers configure the entity once and then reconcile
any number of new/old collections.
"""

from typing import Generic, Iterable, Optional, TypeVar

from reconciliation.accessors import RecordAccessor
from reconciliation.buckets import CompareResult
from reconciliation.comparer import compare_data, compare_data_with_common
from validation.config import ReconcileConfig

T = TypeVar('T')


class Reconciler(Generic[T]):
    """Classifies new vs old records of one entity type.

    Uses the secondary-key mode when the accessor provides both set_id and
    get_common, the identity-only mode when it provides neither.

    Args:
        get_id: Returns a record's identity, or None if not yet persisted
        set_id: Assigns an identity to a record in place
        get_common: Returns a record's secondary key
        config: Optional ReconcileConfig (defaults apply if None)

    Raises:
        TypeError: If only one of set_id/get_common is given
    """

    def __init__(self, get_id, set_id=None, get_common=None, config: Optional[ReconcileConfig] = None):
        if (set_id is None) != (get_common is None):
            raise TypeError("set_id and get_common must be given together")
        self.accessor = RecordAccessor(get_id=get_id, set_id=set_id, get_common=get_common)
        self.config = config or ReconcileConfig()

    @classmethod
    def from_accessor(cls, accessor: RecordAccessor, config: Optional[ReconcileConfig] = None) -> "Reconciler":
        """Create a Reconciler from a RecordAccessor."""
        return cls(
            accessor.get_id,
            set_id=accessor.set_id,
            get_common=accessor.get_common,
            config=config,
        )

    @property
    def uses_common(self) -> bool:
        """True if fake adds are detected via the secondary key."""
        return self.accessor.supports_common

    def reconcile(self, new_items: Iterable[T], old_items: Iterable[T]) -> CompareResult[T]:
        """Classify records into add/update/update_before/delete.

        Args:
            new_items: Records as they should be after the change
            old_items: Records as they are currently stored

        Returns:
            CompareResult with the four buckets
        """
        accessor = self.accessor
        if self.uses_common:
            result = compare_data_with_common(
                new_items, old_items,
                accessor.get_id, accessor.set_id, accessor.get_common,
                config=self.config,
            )
        else:
            result = compare_data(new_items, old_items, accessor.get_id, config=self.config)

        return result
