"""
Validation module for the reconciler.

Provides the reconciliation settings model and the errors raised when
strict key checking is enabled.
"""

from validation.config import ReconcileConfig, validate_config
from validation.errors import DuplicateKeyError, ReconcileError

__all__ = [
    'ReconcileConfig',
    'validate_config',
    'DuplicateKeyError',
    'ReconcileError',
]
