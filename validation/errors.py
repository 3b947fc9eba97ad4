"""
Exceptions raised by the reconciler.

The comparison itself never fails on well-formed input. The only errors
are opt-in: with ``strict_keys`` enabled, a duplicate identity or
secondary key within one side is reported instead of being resolved by
last-write-wins.
"""

from typing import Hashable


# Sides of a comparison
SIDE_NEW = 'new'
SIDE_OLD = 'old'

# Key kinds a record is indexed by
KIND_IDENTITY = 'identity'
KIND_COMMON = 'common'


class ReconcileError(Exception):
    """Base class for reconciler errors"""
    pass


class DuplicateKeyError(ReconcileError):
    """
    Two or more records on the same side share a key the algorithm indexes by.

    Attributes:
        side: 'new' or 'old'
        kind: 'identity' or 'common'
        key: The colliding key value
        count: How many records on that side carry the key
    """

    def __init__(self, side: str, kind: str, key: Hashable, count: int):
        self.side = side
        self.kind = kind
        self.key = key
        self.count = count
        super().__init__(
            f"{count} {side} records share {kind} key {key!r}; "
            f"{kind} keys must be unique per side"
        )
