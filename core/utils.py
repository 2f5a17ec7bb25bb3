"""
Utility functions for error reporting.
"""

import json
import logging
from typing import Any, Optional
from datetime import datetime

logger = logging.getLogger(__name__)

DETAIL_SEPARATOR = " | "

# Optional diagnostic attributes, in the order they are reported
ERROR_FACETS = ("code", "errno", "type", "cause")


def _single_line(text: str) -> str:
    return " ".join(text.splitlines())


def _safe_str(value: Any) -> str:
    """str() that never raises"""
    try:
        return str(value)
    except Exception:
        try:
            return repr(value)
        except Exception:
            return f"<{type(value).__name__}>"


def _serialize_cause(cause: Any) -> str:
    """Render a cause as JSON text instead of an opaque object reference"""
    if isinstance(cause, str):
        return cause
    if isinstance(cause, BaseException):
        cause = {"type": type(cause).__name__, "message": _safe_str(cause)}
    try:
        return json.dumps(cause, default=_safe_str)
    except Exception:
        return _safe_str(cause)


def _facet(error: BaseException, name: str) -> Any:
    """Facet value when present and truthy, otherwise None"""
    try:
        value = getattr(error, name, None)
        if name == "cause" and not value:
            value = error.__cause__
        return value if value else None
    except Exception:
        return None


def get_error_details(error: Any) -> str:
    """Build a one-line diagnostic string for any failure value

    The message comes first, followed by whichever of ``code``, ``errno``,
    ``type`` and ``cause`` the error carries, joined with `` | ``.
    Values that are not exceptions are converted with ``str()``.

    Args:
        error: The failure value, usually an exception

    Returns:
        The formatted detail string. Never raises.
    """
    if not isinstance(error, BaseException):
        return _single_line(_safe_str(error))

    parts = [_safe_str(error) or type(error).__name__]
    for name in ERROR_FACETS:
        value = _facet(error, name)
        if value is None:
            continue
        rendered = _serialize_cause(value) if name == "cause" else _safe_str(value)
        parts.append(f"{name}: {rendered}")

    return _single_line(DETAIL_SEPARATOR.join(parts))


def log_error(error: Exception, context: Optional[dict] = None) -> None:
    """Log error with additional context
    
    Args:
        error: The exception to log
        context: Additional context information
    """
    error_data = {
        "error_type": error.__class__.__name__,
        "error_message": get_error_details(error),
        "timestamp": datetime.now().isoformat(),
    }
    
    if context:
        error_data.update(context)
        
    logger.error(f"Error: {error_data}")
