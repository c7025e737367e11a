"""Validation utilities for inputs and settings."""

from typing import Any, List

from ..types import ErrorType, ValidationError, ValidationResult


class ValidationUtils:
    """Utility class for validating inputs and settings."""

    WORKER_BACKENDS = ("thread", "process")

    @staticmethod
    def validate_input_text(text: str) -> ValidationResult:
        """
        Validate a raw input text before any transform runs.

        Args:
            text: Input text to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if text is None or not isinstance(text, str):
            errors.append(ValidationError(
                type=ErrorType.INVALID_REQUEST,
                message=f"Input must be a string, got {type(text).__name__}",
                location="input"
            ))
        elif not text.strip():
            errors.append(ValidationError(
                type=ErrorType.EMPTY_INPUT,
                message="Input cannot be empty.",
                location="input"
            ))
        elif text != text.strip():
            warnings.append("Input has surrounding whitespace; it is ignored during analysis.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_worker_settings(backend: Any, join_timeout: Any) -> ValidationResult:
        """
        Validate worker settings.

        Args:
            backend: Worker backend name
            join_timeout: Teardown timeout in seconds

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if backend not in ValidationUtils.WORKER_BACKENDS:
            errors.append(ValidationError(
                type=ErrorType.ENVIRONMENT_UNSUPPORTED,
                message=f"Worker backend must be one of {', '.join(ValidationUtils.WORKER_BACKENDS)}, got {backend!r}",
                location="execution.worker_backend"
            ))

        if isinstance(join_timeout, bool) or not isinstance(join_timeout, (int, float)) or join_timeout < 0:
            errors.append(ValidationError(
                type=ErrorType.INVALID_REQUEST,
                message=f"Worker join timeout must be a non-negative number, got {join_timeout!r}",
                location="execution.worker_join_timeout"
            ))
        elif join_timeout > 30:
            warnings.append(f"Worker join timeout is very large ({join_timeout}s). Teardown may block.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
