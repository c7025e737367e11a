"""Core type definitions for the JSON Compressor."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class Classification(Enum):
    """Enumeration of recognized input formats."""
    STRUCTURED = "json"
    COMPRESSED = "compressed"
    UNRECOGNIZED = "unknown"


class Action(Enum):
    """Enumeration of supported transform actions."""
    COMPRESS = "compress"
    DECOMPRESS = "decompress"


class ExecutionMode(Enum):
    """Enumeration of execution strategies."""
    INLINE = "inline"
    DELEGATED = "delegated"


class ErrorType(Enum):
    """Enumeration of error types."""
    EMPTY_INPUT = "empty_input"
    INVALID_STRUCTURED_INPUT = "invalid_structured_input"
    DECODE_FAILURE = "decode_failure"
    INVALID_DECODED_CONTENT = "invalid_decoded_content"
    INVALID_REQUEST = "invalid_request"
    ENVIRONMENT_UNSUPPORTED = "environment_unsupported"
    TRANSPORT_FAILURE = "transport_failure"


class ProcessingError(Exception):
    """Custom exception for processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


@dataclass
class TransformRequest:
    """A single compress or decompress request."""
    action: Action
    payload: str

    def to_message(self) -> Dict[str, str]:
        """Build the worker request message."""
        return {"action": self.action.value, "data": self.payload}

    @classmethod
    def from_message(cls, message: Any) -> "TransformRequest":
        """
        Rebuild a request from a worker request message.

        Raises:
            ProcessingError: If the message does not have the request shape
        """
        if not isinstance(message, dict):
            raise ProcessingError("Invalid request message.", ErrorType.INVALID_REQUEST)

        try:
            action = Action(message.get("action"))
        except ValueError:
            raise ProcessingError("Invalid action provided.", ErrorType.INVALID_REQUEST)

        payload = message.get("data")
        if not isinstance(payload, str):
            raise ProcessingError("Request data must be a string.", ErrorType.INVALID_REQUEST)

        return cls(action=action, payload=payload)


@dataclass
class TransformResult:
    """Result of a transform: either an output text or a failure reason."""
    success: bool
    result: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None

    @classmethod
    def ok(cls, result: str) -> "TransformResult":
        return cls(success=True, result=result)

    @classmethod
    def failure(cls, error_type: ErrorType, reason: str) -> "TransformResult":
        return cls(success=False, error=reason, error_type=error_type)

    def to_message(self) -> Dict[str, Any]:
        """
        Build the worker response message.

        The failure text carries the error type as a ``"<type>: "`` prefix so
        the receiving side can rebuild the typed result.
        """
        if self.success:
            return {"success": True, "result": self.result}

        error = self.error or "Worker processing failed."
        if self.error_type is not None:
            error = f"{self.error_type.value}: {error}"
        return {"success": False, "error": error}

    @classmethod
    def from_message(cls, message: Any) -> "TransformResult":
        """
        Rebuild a result from a worker response message.

        Raises:
            ProcessingError: If the message is not one of the two response shapes
        """
        if not isinstance(message, dict) or not isinstance(message.get("success"), bool):
            raise ProcessingError("Malformed worker response.", ErrorType.TRANSPORT_FAILURE)

        if message["success"]:
            result = message.get("result")
            if not isinstance(result, str):
                raise ProcessingError("Malformed worker response.", ErrorType.TRANSPORT_FAILURE)
            return cls.ok(result)

        error = message.get("error")
        if not isinstance(error, str) or not error:
            error = "Worker execution failed."

        prefix, separator, reason = error.partition(": ")
        if separator:
            for error_type in ErrorType:
                if error_type.value == prefix:
                    return cls.failure(error_type, reason)

        return cls(success=False, error=error)


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


@dataclass
class AnalysisResult:
    """Result of analyzing an input text."""
    classification: Classification
    byte_size: int
    status_message: str


@dataclass
class ActionResult:
    """Result of a classify-then-transform call."""
    success: bool
    action: Optional[Action]
    mode: ExecutionMode
    output: str = ""
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None
    original_size: int = 0
    result_size: int = 0
    duration_ms: float = 0.0
    reduction: Optional[float] = None


# Abstract base classes for interfaces

class TransformEngineInterface(ABC):
    """Abstract interface for the transform engine."""

    @abstractmethod
    def compress(self, structured_text: str) -> str:
        """Compress a JSON document into a printable encoding."""
        pass

    @abstractmethod
    def decompress(self, encoded_text: str) -> str:
        """Decompress an encoding into pretty-printed JSON."""
        pass

    @abstractmethod
    def execute(self, request: TransformRequest) -> TransformResult:
        """Run a request, converting processing failures into a result."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle processing errors."""
        pass
