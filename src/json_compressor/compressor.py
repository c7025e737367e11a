"""Main JSON Compressor implementation."""

import logging
from typing import Optional, Union

from .classifier import FormatClassifier
from .config import CompressorConfig
from .dispatcher import ExecutionDispatcher
from .engine import TransformEngine
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler
from .types import (
    Action,
    ActionResult,
    AnalysisResult,
    Classification,
    ErrorType,
    ExecutionMode,
)
from .utils.size_calculator import SizeCalculator


class JSONCompressor:
    """
    Classify-then-transform entry point.

    Recognizes whether an input is a JSON document or an LZ-string encoding
    of one and runs the opposite transform, inline or in a worker.
    """

    def __init__(self, config: Optional[CompressorConfig] = None,
                 logger: Optional[logging.Logger] = None,
                 dispatcher: Optional[ExecutionDispatcher] = None):
        """
        Initialize the JSON Compressor.

        Args:
            config: Optional configuration (defaults plus config file)
            logger: Optional logger instance
            dispatcher: Optional pre-built dispatcher
        """
        self.config = config or CompressorConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.logger)
        self.classifier = FormatClassifier(logger=self.logger)
        self.size_calculator = SizeCalculator(self.logger)
        self.profiler = PerformanceProfiler(self.logger)
        self.dispatcher = dispatcher or ExecutionDispatcher(
            engine=TransformEngine(logger=self.logger),
            worker_backend=self.config.worker_backend,
            worker_join_timeout=self.config.worker_join_timeout,
            logger=self.logger
        )

    def analyze(self, text: str) -> AnalysisResult:
        """
        Classify an input and measure it.

        Args:
            text: Raw input text

        Returns:
            AnalysisResult with classification, byte size and status message
        """
        classification = self.classifier.classify(text)
        trimmed = (text or "").strip()
        return AnalysisResult(
            classification=classification,
            byte_size=self.size_calculator.calculate_byte_size(trimmed),
            status_message=self.classifier.describe(classification, trimmed)
        )

    async def handle_action(self, text: str,
                            use_worker: Optional[Union[bool, ExecutionMode]] = None) -> ActionResult:
        """
        Classify an input and run the opposite transform.

        JSON documents are compressed; anything else is handed to decompress,
        which reports why it is not a valid encoding. Blank input is rejected
        before any transform or worker is started.

        Args:
            text: Raw input text
            use_worker: Execution mode (None = configured default)

        Returns:
            ActionResult with output or failure reason and size/timing details
        """
        mode = self._resolve_mode(use_worker)

        rejected = self._validate(text, None, mode)
        if rejected is not None:
            return rejected

        classification = self.classifier.classify(text)
        action = Action.COMPRESS if classification == Classification.STRUCTURED else Action.DECOMPRESS
        return await self._transform(action, text, mode)

    async def run_action(self, action: Union[Action, str], text: str,
                         use_worker: Optional[Union[bool, ExecutionMode]] = None) -> ActionResult:
        """
        Run an explicit action without classification.

        Args:
            action: Action or its value
            text: Input text
            use_worker: Execution mode (None = configured default)

        Returns:
            ActionResult with output or failure reason and size/timing details;
            an unknown action is an INVALID_REQUEST failure
        """
        mode = self._resolve_mode(use_worker)
        try:
            action = Action(action)
        except ValueError:
            self.logger.info(f"Rejected unknown action: {action!r}")
            return ActionResult(
                success=False,
                action=None,
                mode=mode,
                error="Invalid action provided.",
                error_type=ErrorType.INVALID_REQUEST
            )

        rejected = self._validate(text, action, mode)
        if rejected is not None:
            return rejected

        return await self._transform(action, text, mode)

    def _validate(self, text: str, action: Optional[Action], mode: ExecutionMode) -> Optional[ActionResult]:
        validation = self.error_handler.validate_input(text)
        if validation.is_valid:
            return None

        error = validation.errors[0]
        self.logger.info(f"Rejected input: {error.message}")
        return ActionResult(
            success=False,
            action=action,
            mode=mode,
            error=error.message,
            error_type=error.type
        )

    async def _transform(self, action: Action, text: str, mode: ExecutionMode) -> ActionResult:
        original_size = self.size_calculator.calculate_byte_size(text.strip())

        with self.profiler.profile_operation(action.value, original_size) as session:
            result = await self.dispatcher.run(action, text, mode)
            session.output_size = self.size_calculator.calculate_byte_size(result.result)
        metrics = session.metrics

        if not result.success:
            response = self.error_handler.suggest_for_result(result)
            if response is not None:
                self.logger.info(f"Suggested action: {response.suggested_action}")
            return ActionResult(
                success=False,
                action=action,
                mode=mode,
                error=result.error or "An unexpected error occurred during processing.",
                error_type=result.error_type,
                original_size=original_size,
                duration_ms=metrics.duration_ms
            )

        result_size = session.output_size
        reduction = None
        if action == Action.COMPRESS:
            reduction = self.size_calculator.calculate_reduction(original_size, result_size)

        label = "Compression" if action == Action.COMPRESS else "Decompression"
        self.logger.info(f"{label} successful! Time taken: {metrics.duration_ms:.2f} ms "
                         f"(Mode: {'Worker' if mode == ExecutionMode.DELEGATED else 'Sync'})")

        return ActionResult(
            success=True,
            action=action,
            mode=mode,
            output=result.result,
            original_size=original_size,
            result_size=result_size,
            duration_ms=metrics.duration_ms,
            reduction=reduction
        )

    def _resolve_mode(self, use_worker: Optional[Union[bool, ExecutionMode]]) -> ExecutionMode:
        if use_worker is None:
            use_worker = self.config.use_worker
        if isinstance(use_worker, ExecutionMode):
            return use_worker
        return ExecutionMode.DELEGATED if use_worker else ExecutionMode.INLINE
