"""Reconciliation package: classify new vs old records into add/update/delete buckets."""
from reconciliation.accessors import (
    RecordAccessor,
    attribute_accessor,
    composite_key,
    mapping_accessor,
)
from reconciliation.buckets import CompareResult, Tag
from reconciliation.comparer import compare_data, compare_data_with_common, reconcile
from reconciliation.reconciler import Reconciler

__all__ = [
    'Tag',
    'CompareResult',
    'compare_data',
    'compare_data_with_common',
    'reconcile',
    'Reconciler',
    'RecordAccessor',
    'attribute_accessor',
    'mapping_accessor',
    'composite_key',
]
