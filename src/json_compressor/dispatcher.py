"""Execution dispatcher running transforms inline or in a worker context."""

import asyncio
import logging
from concurrent.futures import Executor
from typing import Any, Callable, Dict, Optional, Union

from .engine import TransformEngine
from .types import (
    Action,
    ErrorType,
    ExecutionMode,
    ProcessingError,
    TransformRequest,
    TransformResult,
)
from .worker import WorkerContext, serve_request


class ExecutionDispatcher:
    """
    Runs a transform on the caller's event loop or in an isolated worker.

    Both strategies call the same :class:`TransformEngine`, so the mode never
    changes the result, only where the work happens. Every outcome, including
    worker spawn and transport failures, is returned as a
    :class:`TransformResult`; nothing is retried.
    """

    TRANSPORT_ERROR_MESSAGE = "Worker error: Could not process data."

    def __init__(self, engine: Optional[TransformEngine] = None,
                 worker_backend: str = "thread",
                 worker_join_timeout: float = 1.0,
                 worker_target: Callable[[Any], None] = serve_request,
                 executor: Optional[Executor] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the dispatcher.

        Args:
            engine: Optional TransformEngine used in inline mode
            worker_backend: "thread" or "process" for delegated mode
            worker_join_timeout: Seconds to wait for a worker on teardown
            worker_target: Function serving one request inside the worker
            executor: Executor used to wait on worker responses (None = loop default)
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.engine = engine or TransformEngine(logger=self.logger)
        self.worker_backend = worker_backend
        self.worker_join_timeout = worker_join_timeout
        self.worker_target = worker_target
        self.executor = executor

    async def run(self, action: Union[Action, str], payload: str,
                  mode: Union[ExecutionMode, str, bool] = ExecutionMode.INLINE) -> TransformResult:
        """
        Run one transform.

        Args:
            action: Action or its value ("compress" / "decompress")
            payload: Input text
            mode: ExecutionMode, its value, or a bool (True = delegated)

        Returns:
            TransformResult of the transform
        """
        try:
            request = TransformRequest(action=Action(action), payload=payload)
        except ValueError:
            return TransformResult.failure(ErrorType.INVALID_REQUEST, "Invalid action provided.")
        if not isinstance(payload, str):
            return TransformResult.failure(ErrorType.INVALID_REQUEST, "Request data must be a string.")

        try:
            mode = self._resolve_mode(mode)
        except ValueError:
            return TransformResult.failure(ErrorType.INVALID_REQUEST, f"Invalid execution mode: {mode}")
        self.logger.debug(f"Dispatching {request.action.value} ({len(payload)} chars) in {mode.value} mode")

        if mode == ExecutionMode.DELEGATED:
            return await self._run_delegated(request)
        return await self._run_inline(request)

    def submit(self, action: Union[Action, str], payload: str,
               mode: Union[ExecutionMode, str, bool] = ExecutionMode.INLINE) -> "asyncio.Task[TransformResult]":
        """Schedule :meth:`run` on the running loop and return its task."""
        return asyncio.ensure_future(self.run(action, payload, mode))

    @staticmethod
    def _resolve_mode(mode: Union[ExecutionMode, str, bool]) -> ExecutionMode:
        if isinstance(mode, bool):
            return ExecutionMode.DELEGATED if mode else ExecutionMode.INLINE
        return ExecutionMode(mode)

    async def _run_inline(self, request: TransformRequest) -> TransformResult:
        # let the caller observe its "processing" state before the work runs
        await asyncio.sleep(0)
        return self.engine.execute(request)

    async def _run_delegated(self, request: TransformRequest) -> TransformResult:
        loop = asyncio.get_running_loop()
        context = WorkerContext(
            backend=self.worker_backend,
            target=self.worker_target,
            join_timeout=self.worker_join_timeout,
            logger=self.logger
        )

        try:
            context.start()
        except ProcessingError as e:
            return TransformResult.failure(e.error_type, str(e))

        try:
            message = await loop.run_in_executor(self.executor, self._exchange, context, request.to_message())
            return TransformResult.from_message(message)
        except asyncio.CancelledError:
            # the executor call finishes the teardown once the worker lets go of the channel
            self.logger.debug("Delegated run cancelled, abandoning the worker")
            context.interrupt()
            raise
        except (EOFError, OSError) as e:
            self.logger.error(f"Worker transport failed: {type(e).__name__}: {e}")
            return TransformResult.failure(ErrorType.TRANSPORT_FAILURE, self.TRANSPORT_ERROR_MESSAGE)
        except ProcessingError as e:
            self.logger.error(f"Worker returned an invalid response: {e}")
            return TransformResult.failure(e.error_type, str(e))

    @staticmethod
    def _exchange(context: WorkerContext, message: Dict[str, Any]) -> Any:
        # runs on an executor thread; the teardown join happens here, off the event loop
        try:
            return context.exchange(message)
        finally:
            context.terminate()
