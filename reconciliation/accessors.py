"""
Record accessors for reconciliation.

The comparison never inspects records directly. It reads identities and
secondary keys, and writes identities, through caller-supplied functions.
A RecordAccessor bundles those functions for one entity type, and the
factories below build one for plain objects or for dicts.
"""
from dataclasses import dataclass
from operator import attrgetter, itemgetter
from typing import Any, Callable, Hashable, Optional, Sequence, Union

CommonFields = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class RecordAccessor:
    """Capability bundle for one entity type.

    Attributes:
        get_id: Returns the record's identity, or None if not yet persisted
        set_id: Assigns an identity to a record in place (advanced mode only)
        get_common: Returns the record's secondary key (advanced mode only)
    """
    get_id: Callable[[Any], Optional[Hashable]]
    set_id: Optional[Callable[[Any, Hashable], None]] = None
    get_common: Optional[Callable[[Any], Hashable]] = None

    @property
    def supports_common(self) -> bool:
        """True if this accessor can drive secondary-key reclassification."""
        return self.set_id is not None and self.get_common is not None


def composite_key(*fields: str, getter=attrgetter) -> Callable[[Any], Hashable]:
    """Build a secondary-key extractor from one or more field names.

    A single field yields the field value itself; several fields yield a
    tuple of values in the order given.

    Args:
        *fields: Field names making up the key
        getter: ``operator.attrgetter`` for objects, ``operator.itemgetter``
            for mappings

    Raises:
        ValueError: If no field name is given
    """
    if not fields:
        raise ValueError("composite_key needs at least one field")
    # attrgetter/itemgetter already return a tuple for several fields
    return getter(*fields)


def _normalize_common(common: CommonFields) -> tuple[str, ...]:
    if common is None:
        return ()
    if isinstance(common, str):
        return (common,)
    return tuple(common)


def attribute_accessor(id_attr: str = 'id', common: CommonFields = None) -> RecordAccessor:
    """Accessor for objects exposing identity and key fields as attributes.

    Args:
        id_attr: Attribute holding the identity
        common: Attribute name(s) forming the secondary key. Leave unset
            for basic (identity-only) comparison.

    Returns:
        RecordAccessor reading/writing ``id_attr`` via getattr/setattr
    """
    def get_id(record):
        return getattr(record, id_attr)

    def set_id(record, identity):
        setattr(record, id_attr, identity)

    fields = _normalize_common(common)
    if not fields:
        return RecordAccessor(get_id=get_id)
    return RecordAccessor(
        get_id=get_id,
        set_id=set_id,
        get_common=composite_key(*fields, getter=attrgetter),
    )


def mapping_accessor(id_key: str = 'id', common: CommonFields = None) -> RecordAccessor:
    """Accessor for dict records.

    A missing identity key reads as None (not yet persisted). Secondary-key
    fields must be present.

    Args:
        id_key: Key holding the identity
        common: Key name(s) forming the secondary key. Leave unset for
            basic (identity-only) comparison.

    Returns:
        RecordAccessor reading/writing ``record[id_key]``
    """
    def get_id(record):
        return record.get(id_key)

    def set_id(record, identity):
        record[id_key] = identity

    fields = _normalize_common(common)
    if not fields:
        return RecordAccessor(get_id=get_id)
    return RecordAccessor(
        get_id=get_id,
        set_id=set_id,
        get_common=composite_key(*fields, getter=itemgetter),
    )
