"""Error handling implementation for the JSON Compressor."""

import logging
from typing import Optional

from .types import (
    ErrorHandlerInterface,
    ErrorResponse,
    ErrorType,
    ProcessingError,
    TransformResult,
    ValidationError,
    ValidationResult,
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for JSON Compressor operations.

    Validates inputs before a transform is attempted and turns processing
    errors into results and recovery suggestions. It never retries anything
    itself; retrying (possibly in the other execution mode) is up to the caller.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate an input text.

        Args:
            input_data: Raw input text

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_input_text(input_data)
        except Exception as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.INVALID_REQUEST,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """
        Handle processing errors and provide recovery suggestions.

        Args:
            error: ProcessingError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Processing error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.EMPTY_INPUT:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Paste or load a JSON document or a compressed string."
            )
        elif error.error_type == ErrorType.INVALID_STRUCTURED_INPUT:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Fix the JSON syntax error and compress again."
            )
        elif error.error_type in (ErrorType.DECODE_FAILURE, ErrorType.INVALID_DECODED_CONTENT):
            return ErrorResponse(
                can_recover=False,
                suggested_action="The compressed string is corrupted or incomplete. "
                                 "Partial recovery is not supported; use the complete original string."
            )
        elif error.error_type == ErrorType.ENVIRONMENT_UNSUPPORTED:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Workers are unavailable here. Retry in inline mode."
            )
        elif error.error_type == ErrorType.TRANSPORT_FAILURE:
            return ErrorResponse(
                can_recover=True,
                suggested_action="The worker failed before responding. Retry, or switch to inline mode."
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Invalid request. Use the compress or decompress action with text input."
            )

    def to_result(self, error: ProcessingError) -> TransformResult:
        """Convert a processing error into a failed TransformResult."""
        return TransformResult.failure(error.error_type, str(error))

    def suggest_for_result(self, result: TransformResult) -> Optional[ErrorResponse]:
        """Recovery suggestion for a failed result, None for successes and untyped failures."""
        if result.success or result.error_type is None:
            return None
        return self.handle_processing_error(ProcessingError(result.error or "", result.error_type))
