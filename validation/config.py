"""
Configuration validation for the reconciler.

Provides a pydantic v2 model for the optional reconciliation settings
with fail-fast behavior and sensible defaults.
"""

from pydantic import BaseModel, Field, field_validator, ValidationError
from typing import Optional
import logging

from shared.logging_config import configure_logging

log = logging.getLogger('Reconciler.config')

LOG_LEVELS = ('trace', 'debug', 'info', 'warning', 'error')


class ReconcileConfig(BaseModel):
    """
    Reconciliation settings with validation.

    All fields are optional:
        strict_keys: Raise DuplicateKeyError when identities or secondary keys
            collide within one side (default: False = last write wins)
        warn_on_duplicates: Log a warning for each collision when not strict (default: True)
        log_reclassified: Log every fake-add reclassification at INFO (default: False)
        log_level: Level installed by apply_logging (default: "info")
    """

    strict_keys: bool = Field(
        default=False,
        description="Raise on duplicate identity/secondary keys instead of last-write-wins"
    )
    warn_on_duplicates: bool = Field(
        default=True,
        description="Log a warning when a duplicate key is overwritten"
    )
    log_reclassified: bool = Field(
        default=False,
        description="Log each fake add that was turned into an update"
    )
    log_level: str = Field(
        default="info",
        description="Logging level: trace, debug, info, warning, error"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log_level is one of: trace, debug, info, warning, error."""
        if isinstance(v, str) and v.lower() in LOG_LEVELS:
            return v.lower()
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got: {v}")

    @field_validator(
        'strict_keys', 'warn_on_duplicates', 'log_reclassified',
        mode='before'
    )
    @classmethod
    def validate_booleans(cls, v):
        """Ensure boolean fields are actual booleans, not truthy strings."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            lower = v.lower()
            if lower in ('true', '1', 'yes'):
                return True
            if lower in ('false', '0', 'no'):
                return False
            raise ValueError(f"Invalid boolean value: {v}")
        raise ValueError(f"Expected boolean, got {type(v).__name__}")

    def apply_logging(self) -> None:
        """Install structured JSON logging on the root logger at log_level.

        For the application that owns the process; the reconciler never
        calls this itself.
        """
        configure_logging(self.log_level)

    def log_config(self) -> None:
        """Log the effective settings."""
        log.info(
            f"Reconciler config: strict_keys={self.strict_keys}, "
            f"warn_on_duplicates={self.warn_on_duplicates}, "
            f"log_reclassified={self.log_reclassified}, "
            f"log_level={self.log_level}"
        )
        if not self.strict_keys and not self.warn_on_duplicates:
            log.warning(
                "Duplicate key warnings disabled; colliding identities or "
                "secondary keys will be overwritten silently"
            )


def validate_config(config_dict: dict) -> tuple[Optional[ReconcileConfig], Optional[str]]:
    """
    Validate configuration dictionary and return ReconcileConfig or error message.

    Args:
        config_dict: Dictionary containing configuration values

    Returns:
        Tuple of (ReconcileConfig, None) on success,
        or (None, error_message) on validation failure
    """
    try:
        config = ReconcileConfig(**config_dict)
        return (config, None)
    except ValidationError as e:
        # Extract user-friendly error messages
        errors = []
        for error in e.errors():
            field = '.'.join(str(loc) for loc in error['loc'])
            msg = error['msg']
            errors.append(f"{field}: {msg}")
        error_message = '; '.join(errors)
        return (None, error_message)


# Re-export ValidationError for external use
__all__ = ['ReconcileConfig', 'validate_config', 'ValidationError']
