"""
Comparison of new records against old records.

Two modes are provided:
- compare_data: identity-only. New records without an identity are adds,
  new records with one are updates, old records whose identity is not
  among the updates are deletes.
- compare_data_with_common: additionally detects "fake adds". A new
  record with no identity whose secondary key matches an old record that
  would otherwise be deleted is the same logical entity re-entered by
  hand. It is turned into an update and given the old identity (in place,
  via set_id) so anything referencing that identity stays valid.

Preconditions: identities are unique within each side, and in the
advanced mode secondary keys are unique within each side. Violations are
resolved by last-write-wins (the later record in iteration order is kept)
and logged as a warning, or raised as DuplicateKeyError when
ReconcileConfig.strict_keys is set.
"""
from collections import Counter
from typing import Callable, Hashable, Iterable, Optional, TypeVar

from reconciliation.buckets import CompareResult
from validation.config import ReconcileConfig
from validation.errors import (
    DuplicateKeyError,
    KIND_COMMON,
    KIND_IDENTITY,
    SIDE_NEW,
    SIDE_OLD,
)

from shared.log import create_logger
log_trace, log_debug, log_info, log_warn, _ = create_logger("Comparer")

T = TypeVar('T')
K = TypeVar('K', bound=Hashable)
C = TypeVar('C', bound=Hashable)

# Keyed index entry: (position in source sequence, record)
Entry = tuple[int, T]


def _check_duplicates(
    keys: Iterable[Hashable],
    side: str,
    kind: str,
    config: ReconcileConfig
) -> None:
    """Report keys occurring more than once on one side.

    Raises:
        DuplicateKeyError: On the first duplicate, if config.strict_keys
    """
    counts = Counter(keys)
    for key, count in counts.items():
        if count < 2:
            continue
        if config.strict_keys:
            raise DuplicateKeyError(side, kind, key, count)
        if config.warn_on_duplicates:
            log_warn(
                f"{count} {side} records share {kind} key {key!r}; "
                f"{kind} keys must be unique per side"
            )


def _index(
    entries: list[tuple[Hashable, int, T]],
    side: str,
    kind: str,
    config: ReconcileConfig
) -> dict[Hashable, Entry]:
    """Build key -> (position, record), last write wins."""
    _check_duplicates((key for key, _, _ in entries), side, kind, config)
    index = {}
    for key, position, record in entries:
        index[key] = (position, record)
    return index


def _in_source_order(index: dict[Hashable, Entry]) -> list:
    return [record for _, record in sorted(index.values(), key=lambda e: e[0])]


def compare_data(
    new_items: Iterable[T],
    old_items: Iterable[T],
    get_id: Callable[[T], Optional[K]],
    config: Optional[ReconcileConfig] = None
) -> CompareResult[T]:
    """Compare new records against old records by identity only.

    Args:
        new_items: Records as they should be after the change
        old_items: Records as they are currently stored
        get_id: Returns a record's identity, or None if not yet persisted
        config: Optional ReconcileConfig (defaults apply if None)

    Returns:
        CompareResult where:
        - add: new records with no identity
        - update: new records with an identity (last one wins per identity)
        - update_before: old records whose identity is in update
        - delete: old records whose identity is not in update

    Raises:
        DuplicateKeyError: Only when config.strict_keys is set and an
            identity occurs twice on one side
    """
    config = config or ReconcileConfig()

    add = []
    identified = []
    for position, record in enumerate(new_items):
        identity = get_id(record)
        if identity is None:
            add.append(record)
        else:
            identified.append((identity, position, record))

    update = _index(identified, SIDE_NEW, KIND_IDENTITY, config)

    old = [(get_id(record), record) for record in old_items]
    _check_duplicates(
        (identity for identity, _ in old if identity is not None),
        SIDE_OLD, KIND_IDENTITY, config
    )

    update_before = []
    delete = []
    for identity, record in old:
        if identity is not None and identity in update:
            update_before.append((identity, record))
        else:
            delete.append(record)

    # Pair with update order; stable so duplicate old identities keep their order
    update_before.sort(key=lambda pair: update[pair[0]][0])

    result = CompareResult(
        add=add,
        update=_in_source_order(update),
        update_before=[record for _, record in update_before],
        delete=delete,
    )
    log_debug(f"Compared by identity: {result.counts()}")
    return result


def compare_data_with_common(
    new_items: Iterable[T],
    old_items: Iterable[T],
    get_id: Callable[[T], Optional[K]],
    set_id: Callable[[T, K], None],
    get_common: Callable[[T], C],
    config: Optional[ReconcileConfig] = None
) -> CompareResult[T]:
    """Compare new records against old records, detecting fake adds.

    A new record without identity whose secondary key equals that of an old
    record not otherwise updated is reclassified as an update: it is given
    the old record's identity via ``set_id`` (mutating the caller's record)
    and the old record becomes its update_before.

    Args:
        new_items: Records as they should be after the change
        old_items: Records as they are currently stored
        get_id: Returns a record's identity, or None if not yet persisted
        set_id: Assigns an identity to a record in place
        get_common: Returns a record's secondary key, unique per side
        config: Optional ReconcileConfig (defaults apply if None)

    Returns:
        CompareResult where:
        - add: new records with no identity and no secondary-key match
        - update: new records with an identity, including reclassified ones
        - update_before: old record for each identity in update
        - delete: old records neither updated nor reclassified

    Raises:
        DuplicateKeyError: Only when config.strict_keys is set and an
            identity or secondary key occurs twice on one side. Raised
            before any record is mutated.
    """
    config = config or ReconcileConfig()

    # Step 1: index both sides
    unidentified = []
    identified = []
    for position, record in enumerate(new_items):
        identity = get_id(record)
        if identity is None:
            unidentified.append((get_common(record), position, record))
        else:
            identified.append((identity, position, record))

    add_candidates = _index(unidentified, SIDE_NEW, KIND_COMMON, config)
    update = _index(identified, SIDE_NEW, KIND_IDENTITY, config)

    matched = []
    unmatched = []
    unmatched_ids = []
    for position, record in enumerate(old_items):
        identity = get_id(record)
        if identity is not None and identity in update:
            matched.append((identity, position, record))
        else:
            unmatched.append((get_common(record), position, record))
            if identity is not None:
                unmatched_ids.append(identity)

    update_before = _index(matched, SIDE_OLD, KIND_IDENTITY, config)
    delete_candidates = _index(unmatched, SIDE_OLD, KIND_COMMON, config)
    # Delete candidates lend their identity to fake adds, so it must be unique too
    _check_duplicates(unmatched_ids, SIDE_OLD, KIND_IDENTITY, config)

    # Step 2: an add and a delete sharing a secondary key are one entity
    reclassified = []
    for key, (position, up) in add_candidates.items():
        if key not in delete_candidates:
            continue
        old_position, match = delete_candidates[key]
        identity = get_id(match)
        set_id(up, identity)
        update[identity] = (position, up)
        update_before[identity] = (old_position, match)
        reclassified.append(key)
        if config.log_reclassified:
            log_info(f"Fake add with key {key!r} reclassified as update of {identity!r}")
        else:
            log_trace(f"Fake add with key {key!r} reclassified as update of {identity!r}")

    # Step 3: drop reclassified keys once the pass is done
    for key in reclassified:
        del add_candidates[key]
        del delete_candidates[key]

    # Step 4: emit buckets
    ordered_update = sorted(update.items(), key=lambda item: item[1][0])
    result = CompareResult(
        add=_in_source_order(add_candidates),
        update=[record for _, (_, record) in ordered_update],
        update_before=[
            update_before[identity][1]
            for identity, _ in ordered_update
            if identity in update_before
        ],
        delete=_in_source_order(delete_candidates),
    )
    log_debug(
        f"Compared by identity and secondary key: {result.counts()}, "
        f"{len(reclassified)} reclassified"
    )
    return result


def reconcile(
    new_items: Iterable[T],
    old_items: Iterable[T],
    get_id: Callable[[T], Optional[K]],
    set_id: Optional[Callable[[T, K], None]] = None,
    get_common: Optional[Callable[[T], C]] = None,
    config: Optional[ReconcileConfig] = None
) -> CompareResult[T]:
    """Classify records into add/update/update_before/delete.

    Runs the secondary-key mode when both ``set_id`` and ``get_common`` are
    given, the identity-only mode when neither is.

    Raises:
        TypeError: If only one of set_id/get_common is given
    """
    if (set_id is None) != (get_common is None):
        raise TypeError("set_id and get_common must be given together")
    if get_common is None:
        return compare_data(new_items, old_items, get_id, config=config)
    return compare_data_with_common(
        new_items, old_items, get_id, set_id, get_common, config=config
    )
