"""
Utils Package

XML extraction, validation, error handling and logging for EBP Reader.
"""

from .error_handler import (
    EbpError,
    EbpParseError,
    EbpStructureError,
    ErrorHandler,
    ErrorInfo,
    ErrorSeverity,
    ErrorCategory,
    get_error_handler,
)

__all__ = [
    'EbpError',
    'EbpParseError',
    'EbpStructureError',
    'ErrorHandler',
    'ErrorInfo',
    'ErrorSeverity',
    'ErrorCategory',
    'get_error_handler',
]
