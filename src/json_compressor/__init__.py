"""
JSON Compressor - Bidirectional JSON / LZ-string transformation tool.

Recognizes JSON documents and LZ-string (base64) encodings of them and
converts each into the other, inline or in an isolated worker.
"""

from .classifier import FormatClassifier
from .compressor import JSONCompressor
from .config import CompressorConfig
from .dispatcher import ExecutionDispatcher
from .engine import TransformEngine
from .types import (
    Action,
    ActionResult,
    AnalysisResult,
    Classification,
    ErrorType,
    ExecutionMode,
    ProcessingError,
    TransformRequest,
    TransformResult,
)

__version__ = "1.0.0"
__all__ = [
    "JSONCompressor",
    "FormatClassifier",
    "TransformEngine",
    "ExecutionDispatcher",
    "CompressorConfig",
    "Action",
    "ActionResult",
    "AnalysisResult",
    "Classification",
    "ErrorType",
    "ExecutionMode",
    "ProcessingError",
    "TransformRequest",
    "TransformResult",
]
