"""
Component logging for the reconciler.

Every module logs through a named stdlib logger under the "Reconciler"
namespace, with the component name repeated as a message prefix so plain
text output stays readable:
  [Reconciler <component>] message

This module provides a factory to create log functions with a component prefix,
eliminating the need to repeat the logger lookup in every module.

Usage:
    from shared.log import create_logger
    log_trace, log_debug, log_info, log_warn, log_error = create_logger("Comparer")
    log_info("Reclassified 2 records")  # -> [Reconciler Comparer] Reclassified 2 records
"""

import logging

# Below DEBUG; per-record detail only
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER_NAME = "Reconciler"


def create_logger(component: str = ""):
    """Create log functions for a component.

    Args:
        component: Component name suffix. If provided, the logger is
                   "Reconciler.{component}" and the prefix becomes
                   "[Reconciler {component}]", otherwise "Reconciler" / "[Reconciler]".

    Returns:
        Tuple of (log_trace, log_debug, log_info, log_warn, log_error) functions.
    """
    name = f"{ROOT_LOGGER_NAME}.{component}" if component else ROOT_LOGGER_NAME
    prefix = f"[{ROOT_LOGGER_NAME} {component}]" if component else f"[{ROOT_LOGGER_NAME}]"
    logger = logging.getLogger(name)

    def log_trace(msg): logger.log(TRACE, f"{prefix} {msg}")
    def log_debug(msg): logger.debug(f"{prefix} {msg}")
    def log_info(msg): logger.info(f"{prefix} {msg}")
    def log_warn(msg): logger.warning(f"{prefix} {msg}")
    def log_error(msg): logger.error(f"{prefix} {msg}")

    return log_trace, log_debug, log_info, log_warn, log_error
