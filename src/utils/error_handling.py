"""
Centralized Error Logging for the data-access layer
Provides structured logging of persistence failures with sensitive-field redaction.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from contextvars import ContextVar

# Context variables for operation tracing
trace_id_var: ContextVar[str] = ContextVar('trace_id', default='')
operation_context_var: ContextVar[str] = ContextVar('operation_context', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Centralized configuration for error logging behavior"""

    # Security settings
    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization',
        'auth', 'credential', 'hash'
    ]

    # Logging settings
    MAX_VALUE_LOG_SIZE = 5000  # Truncate large values

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively sanitize sensitive data from logs"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(str(key)) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, (list, tuple)):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, bytes):
            return "***BYTES***"
        elif isinstance(data, str) and len(data) > cls.MAX_VALUE_LOG_SIZE:
            return data[:cls.MAX_VALUE_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log structured error with full context"""

        # Generate trace ID for this error
        trace_id = str(uuid.uuid4())[:8]
        trace_id_var.set(trace_id)

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
                "module": getattr(exception, '__module__', 'unknown')
            }

            if include_traceback:
                log_entry["exception"]["traceback"] = traceback.format_exc()

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        operation_context = operation_context_var.get('')
        if operation_context:
            log_entry["operation_context"] = operation_context

        logger.error(json.dumps(log_entry, indent=2, default=str))

        return trace_id

def set_operation_context(context: str):
    """Set context for the current model operation (e.g. "user_info.update")"""
    operation_context_var.set(context)
