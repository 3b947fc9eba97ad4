"""Classification buckets produced by a comparison of new and old records."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Hashable, Optional, TypeVar

T = TypeVar('T')


class Tag(str, Enum):
    """The closed set of buckets a record can be classified into."""
    ADD = 'add'
    UPDATE = 'update'
    UPDATE_BEFORE = 'update_before'
    DELETE = 'delete'


@dataclass
class CompareResult(Generic[T]):
    """Result of comparing new records against old records.

    Attributes:
        add: New records to insert (no identity, no secondary-key match)
        update: New records to write over an existing identity
        update_before: The old record for each identity in ``update``
        delete: Old records with no counterpart among the new records

    ``update`` and ``update_before`` are index-parallel whenever every
    updated record has an old counterpart.
    """
    add: list[T] = field(default_factory=list)
    update: list[T] = field(default_factory=list)
    update_before: list[T] = field(default_factory=list)
    delete: list[T] = field(default_factory=list)

    def __getitem__(self, tag: Tag) -> list[T]:
        return getattr(self, Tag(tag).value)

    def as_tag_map(self) -> dict[Tag, list[T]]:
        """Return the buckets keyed by Tag."""
        return {tag: self[tag] for tag in Tag}

    def counts(self) -> dict[str, int]:
        """Return the size of each bucket keyed by tag value."""
        return {tag.value: len(self[tag]) for tag in Tag}

    @property
    def has_changes(self) -> bool:
        """True if anything needs to be inserted, updated or deleted."""
        return bool(self.add or self.update or self.delete)

    def pairs(
        self,
        get_id: Callable[[T], Optional[Hashable]]
    ) -> list[tuple[T, T]]:
        """Match each updated record with the old record it replaces.

        Args:
            get_id: Identity extractor used for the comparison

        Returns:
            List of (before, after) tuples in ``update`` order. Updated
            records without an old counterpart are skipped.
        """
        before_by_id = {}
        for record in self.update_before:
            before_by_id.setdefault(get_id(record), record)

        pairs = []
        for after in self.update:
            identity = get_id(after)
            if identity in before_by_id:
                pairs.append((before_by_id[identity], after))
        return pairs
