"""Error types and fatal-error reporting for the protein sampler."""

import json
import logging
import time
import traceback
from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ProteinSamplerError(Exception):
    """Base class for every fatal error raised by the sampler."""


class MissingIdentifierError(ProteinSamplerError):
    """A CDS feature has no locus_tag or protein_id and fabrication is off."""

    def __init__(self, start: int):
        self.start = start
        super().__init__(
            f"found a CDS with no locus_tag or protein_id at position {start}"
        )


class EmptyTranslationError(ProteinSamplerError):
    """No translation could be resolved for a feature."""

    def __init__(self, feature_id: str):
        self.feature_id = feature_id
        super().__init__(f"failed to get a translation for CDS {feature_id}")


class InsufficientRecordsError(ProteinSamplerError):
    """More records were requested than were extracted."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"requested {requested} records but only {available} were extracted"
        )


class InvalidArgumentError(ProteinSamplerError, ValueError):
    """An option value is missing or out of range."""


class IOFailureError(ProteinSamplerError):
    """Input could not be read or output could not be written."""

    DIRECTION = "failed to access"

    def __init__(self, path: str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.DIRECTION} {self.path}: {reason}")


class InputFileError(IOFailureError):
    """Input annotation file could not be opened or parsed."""

    DIRECTION = "failed to read input file"


class OutputFileError(IOFailureError):
    """Output file could not be created or written."""

    DIRECTION = "failed to write output file"


class ErrorType(Enum):
    """Types of errors that can occur."""
    MISSING_IDENTIFIER = "missing_identifier"
    EMPTY_TRANSLATION = "empty_translation"
    INSUFFICIENT_RECORDS = "insufficient_records"
    INVALID_ARGUMENT = "invalid_argument"
    FILE_IO_ERROR = "file_io_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error."""
    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    timestamp: float
    operation: str
    item_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    exception: Optional[Exception] = None
    traceback: Optional[str] = None
    suggestion: Optional[str] = None


class ErrorHandler:
    """Classifies fatal errors, logs them and keeps a history for reporting.

    Nothing here retries: every error reaching the handler ends the run.
    """

    SUGGESTIONS = {
        ErrorType.MISSING_IDENTIFIER: (
            "Pass --fabricate_ids 1 to derive IDs from feature coordinates "
            "(e.g. CDS_656_1204)."
        ),
        ErrorType.EMPTY_TRANSLATION: (
            "Check that the CDS has a /translation qualifier or that the "
            "entry includes its nucleotide sequence."
        ),
        ErrorType.INSUFFICIENT_RECORDS: (
            "Lower --count to at most the number of extracted proteins."
        ),
        ErrorType.INVALID_ARGUMENT: "Run with --help to see valid option values.",
        ErrorType.FILE_IO_ERROR: "Check the path exists and its permissions.",
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.error_history: List[ErrorContext] = []

    def handle_error(self,
                     error: Exception,
                     operation: str,
                     item_id: Optional[str] = None,
                     **kwargs) -> ErrorContext:
        """
        Record and log a fatal error.

        Args:
            error: The exception that occurred
            operation: The pipeline stage being performed
            item_id: Optional feature or file identifier
            **kwargs: Additional context data

        Returns:
            ErrorContext with error details and suggestion
        """
        error_type = self._classify_error(error)
        severity = (ErrorSeverity.ERROR if isinstance(error, ProteinSamplerError)
                    else ErrorSeverity.CRITICAL)

        context = ErrorContext(
            error_type=error_type,
            severity=severity,
            message=str(error),
            timestamp=time.time(),
            operation=operation,
            item_id=item_id,
            details=kwargs or None,
            exception=error,
            traceback=traceback.format_exc() if severity == ErrorSeverity.CRITICAL else None,
            suggestion=self.SUGGESTIONS.get(error_type)
        )

        self._log_error(context)
        self.error_history.append(context)

        return context

    def _classify_error(self, error: Exception) -> ErrorType:
        """Classify the error type based on exception."""
        if isinstance(error, MissingIdentifierError):
            return ErrorType.MISSING_IDENTIFIER
        if isinstance(error, EmptyTranslationError):
            return ErrorType.EMPTY_TRANSLATION
        if isinstance(error, InsufficientRecordsError):
            return ErrorType.INSUFFICIENT_RECORDS
        if isinstance(error, InvalidArgumentError):
            return ErrorType.INVALID_ARGUMENT
        if isinstance(error, (IOFailureError, OSError)):
            return ErrorType.FILE_IO_ERROR
        return ErrorType.UNKNOWN

    def _log_error(self, context: ErrorContext):
        """Log error with appropriate level and details."""
        log_message = f"{context.operation} - {context.error_type.value}: {context.message}"

        if context.item_id:
            log_message += f" (item: {context.item_id})"

        if context.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(log_message)
            if context.traceback:
                self.logger.debug(f"Traceback:\n{context.traceback}")
        else:
            self.logger.error(log_message)

        if context.suggestion:
            self.logger.info(f"Suggestion: {context.suggestion}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Summarize recorded errors by type."""
        by_type: Dict[str, int] = {}
        for error in self.error_history:
            by_type[error.error_type.value] = by_type.get(error.error_type.value, 0) + 1

        return {
            'total_errors': len(self.error_history),
            'by_type': by_type
        }

    def export_error_report(self, output_file: str):
        """Export detailed error report as JSON."""
        report = {
            'generated_at': datetime.now().isoformat(),
            'summary': self.get_error_summary(),
            'detailed_errors': []
        }

        for error in self.error_history:
            # Exception objects are not serializable
            error_dict = {
                field.name: getattr(error, field.name)
                for field in fields(error) if field.name != "exception"
            }
            error_dict['error_type'] = error.error_type.value
            error_dict['severity'] = error.severity.value
            error_dict['timestamp'] = datetime.fromtimestamp(error.timestamp).isoformat()

            report['detailed_errors'].append(error_dict)

        try:
            with open(output_file, 'w') as f:
                json.dump(report, f, indent=2, default=str)

            self.logger.info(f"Error report exported to {output_file}")

        except OSError as e:
            self.logger.error(f"Failed to export error report: {e}")


# Global error handler instance
_error_handler = None


def get_error_handler() -> ErrorHandler:
    """Get global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def setup_error_handler() -> ErrorHandler:
    """Replace the global error handler with a fresh one."""
    global _error_handler
    _error_handler = ErrorHandler()
    return _error_handler
