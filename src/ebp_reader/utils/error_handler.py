"""
Error types and the CLI error recorder.

Extraction raises EbpError subclasses; the command line catches them (and
file errors), records each one as an ErrorInfo and logs it at the level
matching its severity. Validation findings go through the same recorder so
the CLI can report them from one place.
"""

from typing import Dict, List, Optional
from enum import Enum, auto
from dataclasses import dataclass, field
from datetime import datetime
import traceback
import logging

logger = logging.getLogger(__name__)


class EbpError(ValueError):
    """Base class for errors that abort decoding of an EBP file."""


class EbpParseError(EbpError):
    """The document is not well-formed XML."""


class EbpStructureError(EbpError):
    """The document lacks structure required for extraction (units container, units)."""


class ErrorSeverity(Enum):
    WARNING = auto()    # Reported, decoding continues
    ERROR = auto()      # Decoding of the file stopped


class ErrorCategory(Enum):
    PARSE = "parse"             # Malformed XML
    STRUCTURE = "structure"     # Missing units container or units
    FILE = "file"               # File could not be read
    VALIDATION = "validation"   # Pre-flight validation findings
    INTERNAL = "internal"


SEVERITY_LOG_LEVELS: Dict[ErrorSeverity, int] = {
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
}


@dataclass
class ErrorInfo:
    """One recorded problem."""
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    category: ErrorCategory = ErrorCategory.INTERNAL
    source: str = ""
    details: str = ""
    recoverable: bool = True
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self):
        return f"[{self.severity.name}] {self.category.value}: {self.message}"


def categorize_exception(exception: Exception) -> ErrorCategory:
    """Map an exception to the category it is reported under."""
    if isinstance(exception, EbpParseError):
        return ErrorCategory.PARSE
    if isinstance(exception, EbpStructureError):
        return ErrorCategory.STRUCTURE
    if isinstance(exception, OSError):
        return ErrorCategory.FILE
    return ErrorCategory.INTERNAL


class ErrorHandler:
    """Records problems of a run in order and logs each one."""

    def __init__(self, max_history: int = 100):
        self._max_history = max_history
        self._history: List[ErrorInfo] = []

    def record(self, error: ErrorInfo) -> ErrorInfo:
        self._history.append(error)
        del self._history[:-self._max_history]

        log_message = f"[{error.category.value}] {error.message}"
        if error.details:
            log_message += f"\nDetails: {error.details}"
        logger.log(SEVERITY_LOG_LEVELS[error.severity], log_message)
        return error

    def handle_exception(self, exception: Exception) -> ErrorInfo:
        """
        Record an exception that stopped processing.

        EbpError subclasses are marked unrecoverable: the file itself is
        broken, retrying won't help.
        """
        details = ""
        if exception.__traceback__ is not None:
            details = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))

        return self.record(ErrorInfo(
            message=str(exception),
            severity=ErrorSeverity.ERROR,
            category=categorize_exception(exception),
            source=exception.__class__.__name__,
            details=details,
            recoverable=not isinstance(exception, EbpError),
        ))

    def warning(self, message: str, category: ErrorCategory) -> ErrorInfo:
        return self.record(ErrorInfo(message=message, severity=ErrorSeverity.WARNING, category=category))

    def get_history(self, category: Optional[ErrorCategory] = None) -> List[ErrorInfo]:
        """Recorded problems, oldest first, optionally of one category."""
        if category is None:
            return list(self._history)
        return [e for e in self._history if e.category == category]


_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the process-wide error handler, creating it on first use."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler
