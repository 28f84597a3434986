"""Application-wide constants for logaspect.

Constants that define library behavior.
For user-configurable sink settings, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Logger names
    "CALL_LOGGER_NAME",
    "SYSTEM_LOGGER_NAME",
    # Directive attributes
    "DIRECTIVE_ATTR",
    "ENDPOINT_ATTR",
    # Log line fragments
    "REQUEST_PREFIX",
    "EXECUTING_PREFIX",
    "FINISHED_PREFIX",
    "ARGUMENTS_CHANGED_PREFIX",
    # Severity
    "TRACE_LEVEL_NUM",
]

# =============================================================================
# Application identity
# =============================================================================

APP_NAME = "logaspect"

# =============================================================================
# Logger names
# =============================================================================

# Intercepted call lines (request, executing, finished, arguments changed)
CALL_LOGGER_NAME = f"{APP_NAME}.calls"

# Operational events (configuration, setup problems)
SYSTEM_LOGGER_NAME = f"{APP_NAME}.system"

# =============================================================================
# Directive attributes
# =============================================================================

# Set on functions and classes by @logged
DIRECTIVE_ATTR = "__logging_directive__"

# Set on classes by @controller
ENDPOINT_ATTR = "__endpoint_handler__"

# =============================================================================
# Log line fragments
# =============================================================================

REQUEST_PREFIX = "Received request "
EXECUTING_PREFIX = "Executing with args "
FINISHED_PREFIX = "Finished. Execution time "
ARGUMENTS_CHANGED_PREFIX = "Arguments have changed "

# =============================================================================
# Severity
# =============================================================================

# stdlib logging has no TRACE; registered below DEBUG (10)
TRACE_LEVEL_NUM = 5
